"""Allow running as `python -m autoclicker`."""

from autoclicker.main import main

main()
