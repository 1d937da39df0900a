from .base import BaseSampler
from .random import RandomSampler

__all__ = ["BaseSampler", "RandomSampler"]
