"""Scope chain for the suro evaluator, kept as an explicit stack of frames. Index 0 is the root frame, seeded with the
native functions and never popped; the last frame is the current one. Lookups walk from the current frame outwards.
"""

from suro.lang.error import GenericException


class Scope:
    """Stack of name: Value frames."""

    def __init__(self, frames=None):
        self.frames = frames if frames is not None else [{}]

    @classmethod
    def new_root(cls, natives):
        """Returns a Scope whose only frame holds a copy of natives."""
        return cls([dict(natives)])

    @property
    def depth(self):
        """Number of frames above the root."""
        return len(self.frames) - 1

    def push(self):
        """Creates and enters a child frame."""
        self.frames.append({})

    def pop(self):
        """Discards the current frame. The root frame cannot be popped."""
        if len(self.frames) == 1:
            raise GenericException("cannot pop the root scope", internal=True)
        self.frames.pop()

    def define(self, name, value):
        """Binds name in the current frame only, overwriting any binding of name in that frame."""
        self.frames[-1][name] = value

    def reassign(self, name, value):
        """Overwrites name in the nearest frame defining it. Returns whether such a frame exists."""
        for frame in reversed(self.frames):
            if name in frame:
                frame[name] = value
                return True
        return False

    def lookup(self, name):
        """Returns the value bound to name in the nearest frame defining it, or None if it is unresolved."""
        for frame in reversed(self.frames):
            if name in frame:
                return frame[name]
        return None

    def __repr__(self):
        return f"Scope(depth={self.depth})"
