"""
Collectible domain models - containers, units and two-step write markers
"""
from dataclasses import dataclass
from enum import Enum


class WritePhase(str, Enum):
    """
    How far a two-step finalized write got.

    PENDING  - nothing finalized yet
    CREATED  - step 1 (create / mint) finalized, metadata missing
    LABELED  - step 2 (metadata) finalized, write complete
    """
    PENDING = "pending"
    CREATED = "created"
    LABELED = "labeled"


@dataclass
class ContainerWrite:
    """Progress of creating + labelling a publisher container."""
    container_id: int
    owner: str
    label: str
    phase: WritePhase = WritePhase.PENDING

    @property
    def is_complete(self) -> bool:
        return self.phase == WritePhase.LABELED

    def describe(self) -> str:
        return f"collection {self.container_id} reached phase '{self.phase.value}'"


@dataclass
class UnitWrite:
    """Progress of minting + labelling one article unit."""
    container_id: int
    unit_id: int
    owner: str
    title: str
    content_hash: str
    phase: WritePhase = WritePhase.PENDING

    @property
    def is_complete(self) -> bool:
        return self.phase == WritePhase.LABELED

    def describe(self) -> str:
        return (
            f"collection {self.container_id}, item {self.unit_id} "
            f"reached phase '{self.phase.value}'"
        )


@dataclass
class RegistrationWrite:
    """
    Progress of the cross-ledger write: unit on AssetHub, record on EduChain.

    CREATED means the unit is minted and labelled but the record is missing;
    complete_registration() with these ids writes just the record.
    """
    container_id: int
    unit_id: int
    publisher: str
    title: str
    content_hash: str
    phase: WritePhase = WritePhase.PENDING

    @property
    def is_complete(self) -> bool:
        return self.phase == WritePhase.LABELED

    def describe(self) -> str:
        return (
            f"collection {self.container_id}, item {self.unit_id} minted, "
            f"article record reached phase '{self.phase.value}'"
        )
