"""Value types shared by the wheel controller and renderer."""

from dataclasses import dataclass

DEFAULT_SPIN_COUNT = 6
DEFAULT_DURATION_MS = 4800


@dataclass(frozen=True)
class WheelItem:
    """One wheel slice. Order in the item list decides slice position."""

    id: str
    label: str


@dataclass(frozen=True)
class SpinRequest:
    """Ask the wheel to land on ``target_item_id``.

    Attributes:
        target_item_id: Winner chosen by the Room Service
        spin_count: Full turns before settling (0 = snap)
        duration_ms: Animation length in milliseconds
    """

    target_item_id: str
    spin_count: int = DEFAULT_SPIN_COUNT
    duration_ms: int = DEFAULT_DURATION_MS

    def __post_init__(self) -> None:
        if self.spin_count < 0:
            raise ValueError(f"spin_count must be >= 0, got {self.spin_count}")
        if self.duration_ms <= 0:
            raise ValueError(f"duration_ms must be > 0, got {self.duration_ms}")


@dataclass(frozen=True)
class SpinPlan:
    """A spin in flight.

    Attributes:
        request: Originating request
        target_index: Index of the winner slice at spin time
        start_deg: Committed rotation when the spin started
        delta_deg: Forward rotation to apply
        started_at: Event loop time (seconds) when the spin started
        token: Generation token the completion callback must match
    """

    request: SpinRequest
    target_index: int
    start_deg: float
    delta_deg: float
    started_at: float
    token: int

    @property
    def target_deg(self) -> float:
        return self.start_deg + self.delta_deg

    @property
    def duration_s(self) -> float:
        return self.request.duration_ms / 1000
