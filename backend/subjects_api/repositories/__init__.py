"""Data access for the subjects service"""

from .subjects import SubjectRepository
