"""RetroHost: self-hosted retro game catalog, ROM and save server."""

__version__ = "0.1.0"
