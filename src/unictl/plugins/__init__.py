"""Plugin system: pluggy hook specifications and plugin discovery."""

import pluggy

hookimpl = pluggy.HookimplMarker("unictl")

__all__ = ["hookimpl"]
