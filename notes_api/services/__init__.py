"""
Notes API — Services Layer
===========================

Service Inventory:
    - NoteService: list / create / update / delete with validation and
      storage-error translation

Services are testable without HTTP: they take an AsyncSession and return
Pydantic models.
"""
