from __future__ import annotations


def main(argv: list[str] | None = None) -> int:
    # Imported lazily so ``python -m item_repricer.cli`` does not load __main__ twice
    from .__main__ import main as _main

    return _main(argv)


__all__ = ["main"]
