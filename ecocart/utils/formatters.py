from ecocart.config import settings


def money(v: float) -> str:
    return f"{v:.{settings.decimals}f} {settings.currency}"


def progress_bar(percent: float, width: int = 10) -> str:
    filled = int(round(percent / 100 * width))
    filled = max(0, min(width, filled))
    return "▰" * filled + "▱" * (width - filled)
