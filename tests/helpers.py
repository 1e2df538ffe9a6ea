from pathlib import Path

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


def fake_response(name: str) -> str:
    """Return the raw body of a canned API response stored under tests/fixtures."""
    return (FIXTURES_DIR / f"{name}.json").read_text(encoding="utf-8")
