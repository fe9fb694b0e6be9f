"""Data models for GitForm."""

from .repository_descriptor import RepositoryDescriptor, name_from_origin
from .result_report import ResultReport

__all__ = ['RepositoryDescriptor', 'ResultReport', 'name_from_origin']
