from __future__ import annotations


class IntentCoreError(Exception):
    pass


class SchemaError(IntentCoreError):
    pass


class NotFound(IntentCoreError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Component with name {name} does not exist")
        self.name = name


class NoMatchingFilter(IntentCoreError):
    def __init__(self, component: str, query: object, stage: str) -> None:
        super().__init__(f"No intent filter of {component} matches {query} (eliminated at {stage} stage)")
        self.component = component
        self.query = query
        self.stage = stage


class UnsupportedType(IntentCoreError):
    def __init__(self, tag: object) -> None:
        super().__init__(f"Extra type {tag!r} not supported")
        self.tag = tag
