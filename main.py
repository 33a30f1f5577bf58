"""Entry point for rendering docblock annotations to HTML fragments."""

from doctags.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
