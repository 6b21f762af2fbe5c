"""
AutoClicker - periodic mouse clicks at the cursor location

Four named profiles hold click intervals; clicking is toggled from the
window, a global hotkey, or the system tray.
"""

__version__ = "0.1.0"
