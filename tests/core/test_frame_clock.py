from __future__ import annotations

from scribble.engine.core.frame_clock import FrameClock


class _Recorder:
    def __init__(self, name: str, log: list[tuple[str, float]]) -> None:
        self.name = name
        self.log = log

    def tick(self, dt: float) -> None:
        self.log.append((self.name, dt))


def test_ticks_in_registration_order() -> None:
    log: list[tuple[str, float]] = []
    clock = FrameClock([_Recorder("animator", log), _Recorder("renderer", log)])
    clock.tick(1 / 30)
    clock.tick(1 / 30)
    assert [n for n, _ in log] == ["animator", "renderer", "animator", "renderer"]
    assert clock.frames == 2


def test_measures_dt_when_not_given() -> None:
    log: list[tuple[str, float]] = []
    clock = FrameClock([_Recorder("a", log)])
    clock.tick()
    assert log[0][1] >= 0.0


def test_reentrant_tick_is_skipped() -> None:
    calls: list[int] = []

    class _Reentrant:
        def __init__(self) -> None:
            self.clock: FrameClock | None = None

        def tick(self, dt: float) -> None:
            calls.append(1)
            assert self.clock is not None
            self.clock.tick(dt)  # 再入は捨てられる

    r = _Reentrant()
    clock = FrameClock([r])
    r.clock = clock
    clock.tick(0.1)
    assert calls == [1]
    assert clock.frames == 1
