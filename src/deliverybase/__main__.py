"""Entry point for 'python -m deliverybase' command."""

from deliverybase.cli import main

if __name__ == "__main__":
    main()
