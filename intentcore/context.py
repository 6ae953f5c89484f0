from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from intentcore.component import ComponentDescription
from intentcore.logging import Logger
from intentcore.pools import ValuePool


@dataclass
class FuzzConfig:
    component_filter: Optional[str] = None
    verbose: bool = False
    seed: Optional[int] = None
    count: int = 5
    bound: int = 100
    harvest: bool = True


@dataclass
class FuzzContext:
    package_name: str
    components: List[ComponentDescription]
    config: FuzzConfig
    pool: ValuePool
    logger: Logger
    apk_path: Optional[str] = None
    apk: object = None
    analysis: object = None
    metrics: dict = field(default_factory=dict)

    def fqn(self, component: ComponentDescription) -> str:
        return component.fully_qualified_name(self.package_name)

    def selected_components(self) -> List[ComponentDescription]:
        wanted = self.config.component_filter
        if not wanted:
            return list(self.components)
        return [c for c in self.components if wanted in self.fqn(c)]
