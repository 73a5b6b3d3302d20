"""
Care Team Registry.

Deduplicates care team members within one resource build and links line
items to them. A member's identity is (identifier value, role): the same
NPI in two roles yields two members, the same NPI and role yields one.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from eob_transformer.core.constants import CODING_SYSTEM_CARE_TEAM_ROLE
from eob_transformer.core.enums import CareTeamRole
from eob_transformer.schemas.eob import CareTeamComponent, CodeableConcept, Extension
from eob_transformer.services.coding import (
    create_codeable_concept,
    create_extension_coding,
    create_identifier_reference,
)

if TYPE_CHECKING:
    from eob_transformer.services.transformers.base import ItemDraft


@dataclass
class CareTeamMember:
    """Care team member under construction."""

    sequence: int
    identifier_system: str
    identifier_value: str
    role: CareTeamRole
    responsible: Optional[bool] = None
    qualification: Optional[CodeableConcept] = None
    extension: list[Extension] = field(default_factory=list)

    @property
    def key(self) -> tuple[str, CareTeamRole]:
        return (self.identifier_value, self.role)

    def add_extension_coding(self, system: str, code: str, url: Optional[str] = None) -> None:
        """Attach an extension coding once; members are re-resolved per line."""
        extension = create_extension_coding(url or system, system, code)
        if extension not in self.extension:
            self.extension.append(extension)

    def to_component(self) -> CareTeamComponent:
        return CareTeamComponent(
            sequence=self.sequence,
            provider=create_identifier_reference(self.identifier_system, self.identifier_value),
            responsible=self.responsible,
            role=create_codeable_concept(CODING_SYSTEM_CARE_TEAM_ROLE, self.role.value),
            qualification=self.qualification,
            extension=tuple(self.extension),
        )


class CareTeamRegistry:
    """
    Care team table for one resource build.

    Not shared across builds; each transform call creates its own.
    """

    def __init__(self):
        self._members: list[CareTeamMember] = []
        self._by_key: dict[tuple[str, CareTeamRole], CareTeamMember] = {}

    def resolve(
        self,
        identifier_system: str,
        identifier_value: str,
        role: CareTeamRole,
        item: Optional["ItemDraft"] = None,
    ) -> CareTeamMember:
        """
        Find or create the member for (identifier value, role).

        Args:
            identifier_system: Identifier system of the practitioner (e.g. NPI)
            identifier_value: Practitioner identifier
            role: Role on the care team
            item: Optional line item draft to link to the member

        Returns:
            The existing or newly created member
        """
        key = (identifier_value, role)
        member = self._by_key.get(key)
        if member is None:
            member = CareTeamMember(
                sequence=len(self._members) + 1,
                identifier_system=identifier_system,
                identifier_value=identifier_value,
                role=role,
            )
            self._members.append(member)
            self._by_key[key] = member

        if item is not None and member.sequence not in item.care_team_link_id:
            item.care_team_link_id.append(member.sequence)

        return member

    @property
    def members(self) -> list[CareTeamMember]:
        return list(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def build(self) -> tuple[CareTeamComponent, ...]:
        """Freeze the members into care team components, in sequence order."""
        return tuple(member.to_component() for member in self._members)
