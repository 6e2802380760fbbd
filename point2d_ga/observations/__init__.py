"""Observation helpers: watch a run, never steer it."""

from .recorder import GenerationRecorder

__all__ = ["GenerationRecorder"]
