from .onboarding_records import GroupSnapshot, PersonRecord

__all__ = ['GroupSnapshot', 'PersonRecord']
