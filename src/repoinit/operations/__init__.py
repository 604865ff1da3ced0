"""Remote-invocable operations exposed by repoinit."""

from .git_init import GitInitOperation, git_init

__all__ = ["GitInitOperation", "git_init"]
