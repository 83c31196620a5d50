"""
Monkey Runtime Environment
Chained variable scopes. A scope is shared by reference between every closure
created in it, so it stays alive as long as any of them does.
"""

from typing import Dict, Optional


class Environment:
  def __init__(self, outer: Optional["Environment"] = None):
    self.store: Dict[str, object] = {}
    self.outer = outer

  @classmethod
  def new_enclosed_environment(cls, outer: "Environment") -> "Environment":
    """Create a fresh scope whose lookups fall back to outer"""
    return cls(outer=outer)

  def get(self, name: str):
    """Look up a value in the environment chain, None when unbound"""
    if name in self.store:
      return self.store[name]
    if self.outer is not None:
      return self.outer.get(name)
    return None

  def set(self, name: str, value) -> None:
    """Bind name in this scope only; outer bindings are shadowed, never rebound"""
    self.store[name] = value

  def bindings(self) -> Dict[str, object]:
    """Snapshot of this scope's own bindings"""
    return dict(self.store)

  def __repr__(self) -> str:
    names = ", ".join(sorted(self.store))
    return f"Environment([{names}], outer={'yes' if self.outer is not None else 'no'})"
