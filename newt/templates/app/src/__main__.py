"""Console entry point for {{name}}."""

import sys


def greet(who: str) -> str:
    return f"Hello, {who}!"


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    print(greet(args[0] if args else "World"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
