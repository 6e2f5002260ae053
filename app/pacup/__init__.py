"""pacup - interactive upgrades for pacman repositories and the AUR."""

__version__ = "0.3.0"
