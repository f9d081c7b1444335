"""
Branch tree analysis.

Providers report branches as a flat list; the tree comes from each branch's
optional ``parent``. Inconsistent parent data is reported as anomalies and
never raises.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import StrEnum

from repolens.services.providers.types import CanonicalBranch

logger = logging.getLogger(__name__)


class BranchAnomalyKind(StrEnum):
    MULTIPLE_ROOTS = "multiple_roots"
    DANGLING_PARENT = "dangling_parent"
    CYCLE = "cycle"


@dataclass(frozen=True)
class BranchAnomaly:
    kind: BranchAnomalyKind
    branch: str
    detail: str


@dataclass
class BranchTree:
    trunk: str | None
    branches: list[CanonicalBranch]
    anomalies: list[BranchAnomaly] = field(default_factory=list)

    def children(self, name: str) -> list[str]:
        return [b.name for b in self.branches if b.parent == name]


def find_trunk(
    branches: Sequence[CanonicalBranch], default_branch: str | None = None
) -> CanonicalBranch | None:
    """
    Pick the trunk branch.

    A branch flagged default wins, then the one named ``default_branch``, then
    the first parentless branch, then the first listed.
    """
    if not branches:
        return None
    for branch in branches:
        if branch.is_default:
            return branch
    if default_branch is not None:
        for branch in branches:
            if branch.name == default_branch:
                return branch
    for branch in branches:
        if branch.parent is None:
            return branch
    return branches[0]


def _find_cycles(branches: Sequence[CanonicalBranch]) -> list[str]:
    parents = {b.name: b.parent for b in branches}
    in_cycle: list[str] = []
    for branch in branches:
        seen = {branch.name}
        current = parents.get(branch.name)
        while current is not None and current in parents:
            if current == branch.name:
                in_cycle.append(branch.name)
                break
            if current in seen:
                # Reaches a cycle it is not part of
                break
            seen.add(current)
            current = parents[current]
    return in_cycle


def analyze_branches(
    branches: Sequence[CanonicalBranch], default_branch: str | None = None
) -> BranchTree:
    """
    Pick the trunk and report parent-chain anomalies.

    Args:
        branches: Branches in provider order
        default_branch: Repository default branch name, when the caller knows it

    Returns:
        BranchTree with the trunk name (None for an empty list) and any anomalies
    """
    branches = list(branches)
    trunk = find_trunk(branches, default_branch)
    names = {b.name for b in branches}
    anomalies: list[BranchAnomaly] = []

    roots = [b.name for b in branches if b.parent is None]
    # Provider branch lists carry no parents; a flat list is not a forest
    declares_parents = len(roots) < len(branches)
    if declares_parents and len(roots) > 1:
        for name in roots[1:]:
            anomalies.append(
                BranchAnomaly(
                    BranchAnomalyKind.MULTIPLE_ROOTS,
                    name,
                    f"Branch '{name}' has no parent but '{roots[0]}' is already a root",
                )
            )

    for branch in branches:
        if branch.parent is not None and branch.parent not in names:
            anomalies.append(
                BranchAnomaly(
                    BranchAnomalyKind.DANGLING_PARENT,
                    branch.name,
                    f"Parent '{branch.parent}' is not a known branch",
                )
            )

    for name in _find_cycles(branches):
        anomalies.append(
            BranchAnomaly(BranchAnomalyKind.CYCLE, name, f"Parent chain of '{name}' loops back")
        )

    if anomalies:
        logger.info(f"Branch analysis found {len(anomalies)} anomalies")
    return BranchTree(trunk=trunk.name if trunk else None, branches=branches, anomalies=anomalies)


def assign_default_parents(
    branches: Sequence[CanonicalBranch], trunk: str | None = None
) -> list[CanonicalBranch]:
    """Give every parentless non-trunk branch the trunk as its parent."""
    if trunk is None:
        found = find_trunk(branches)
        if found is None:
            return []
        trunk = found.name
    return [
        replace(b, parent=trunk) if b.parent is None and b.name != trunk else b
        for b in branches
    ]
