"""Scratch space for {{name}}, created {{now/date}}."""


def main() -> None:
    print("Hello from {{name}}!")


if __name__ == "__main__":
    main()
