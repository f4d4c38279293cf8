from dataclasses import dataclass, field


@dataclass(frozen=True)
class QuakeProperties:
    title: str
    time: int
    tsunami: int


@dataclass(frozen=True)
class EarthquakeRecord:
    title: str = ""
    time_ms: int = 0
    tsunami: int = -1


PLACEHOLDER = EarthquakeRecord()


@dataclass(frozen=True)
class Found:
    record: EarthquakeRecord


@dataclass(frozen=True)
class NotAvailable:
    reason: str | None = None
    record: EarthquakeRecord = field(default=PLACEHOLDER, repr=False)


QuakeResult = Found | NotAvailable
