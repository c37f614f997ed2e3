"""spotinstaller: user-local Spotify installer/updater.

Core design goals:
- One linear run, ordered steps
- No root required; everything lands under $HOME/.local
- Reuse a complete download across failed runs
- Centralized logging
"""

__all__ = []
