# sim/clock.py
SEC = 1.0
MIN = 60.0
HOUR = 3600.0
DAY = 24 * HOUR


def minutes(x: float) -> float:
    return x * MIN


def hours(x: float) -> float:
    return x * HOUR


def hms(h: int, m: int = 0, s: float = 0.0) -> float:
    return h * HOUR + m * MIN + s


def format_time(t: float | None) -> str:
    """Render simulation seconds as HH:MM:SS; hours may exceed 23 for after-midnight trips."""
    if t is None:
        return "undefined"
    sign = "-" if t < 0 else ""
    t = abs(t)
    h = int(t // HOUR)
    m = int((t % HOUR) // MIN)
    s = int(t % MIN)
    return f"{sign}{h:02d}:{m:02d}:{s:02d}"
