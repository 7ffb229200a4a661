"""
Ownership succession planning.

Pure decision logic for what happens to a channel when a member leaves.
It works on plain snapshots of membership rows so it can be unit-tested
without a database; MembershipService applies the resulting plan inside
the transaction that holds the channel lock.

Succession priority when the owner leaves:
    1. Earliest-joined admin
    2. Earliest-joined member
    Ties on joined_at go to the lowest membership id.

Usage:
    plan = plan_succession(
        [MemberSnapshot.from_membership(m) for m in memberships],
        departing_user_id=owner.id,
    )
    if plan.delete_channel:
        channel.delete()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chat.models import MemberRole

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from chat.models import ChannelMembership


@dataclass(frozen=True)
class MemberSnapshot:
    """The fields of a membership row that succession depends on."""

    membership_id: int
    user_id: int
    role: MemberRole
    joined_at: datetime

    @classmethod
    def from_membership(cls, membership: ChannelMembership) -> MemberSnapshot:
        return cls(
            membership_id=membership.id,
            user_id=membership.user_id,
            role=MemberRole(membership.role),
            joined_at=membership.joined_at,
        )


@dataclass(frozen=True)
class SuccessionPlan:
    """
    Outcome of a departure.

    Attributes:
        departing_membership_id: Row to delete for the leaving user
        promote_membership_id: Row to promote to owner, if any
        delete_channel: True when the owner was the last member
    """

    departing_membership_id: int
    promote_membership_id: int | None = None
    delete_channel: bool = False


class NotAMemberError(LookupError):
    """Raised when the departing user has no membership in the snapshot."""


def _seniority(member: MemberSnapshot) -> tuple[datetime, int]:
    return (member.joined_at, member.membership_id)


def plan_succession(
    memberships: Iterable[MemberSnapshot],
    departing_user_id: int,
) -> SuccessionPlan:
    """
    Decide how a channel changes when ``departing_user_id`` leaves.

    Args:
        memberships: Every membership row of the channel
        departing_user_id: User who is leaving

    Returns:
        SuccessionPlan describing the row to delete and, for an owner
        departure, which row becomes owner or whether the channel goes.

    Raises:
        NotAMemberError: The user has no membership in ``memberships``
    """
    members = list(memberships)

    departing = next((m for m in members if m.user_id == departing_user_id), None)
    if departing is None:
        raise NotAMemberError(departing_user_id)

    if departing.role != MemberRole.OWNER:
        return SuccessionPlan(departing_membership_id=departing.membership_id)

    remaining = [m for m in members if m.membership_id != departing.membership_id]
    if not remaining:
        return SuccessionPlan(
            departing_membership_id=departing.membership_id,
            delete_channel=True,
        )

    admins = [m for m in remaining if m.role == MemberRole.ADMIN]
    successor = min(admins or remaining, key=_seniority)

    return SuccessionPlan(
        departing_membership_id=departing.membership_id,
        promote_membership_id=successor.membership_id,
    )
