"""Allow ``python -m pyjsonnet``."""
from pyjsonnet.driver import run

if __name__ == "__main__":  # pragma: no cover - CLI entry point
    run()
