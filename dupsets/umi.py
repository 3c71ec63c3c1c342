"""UMI-aware splitting of duplicate sets.

Reads that share a locus are only duplicates of each other if they also carry the
same molecular identifier, allowing for sequencing errors in the UMI itself. UMIs
are joined when they differ at no more than MAX_UMI_DISTANCE positions, and the
connected components of that graph define the sub-sets.
"""

import logging
from typing import List, Optional

import numpy as np

from dupsets.exceptions import MalformedTagError
from dupsets.types import DuplicateSet, ReadEnd


MAX_UMI_DISTANCE = 1


def _umi_of(record: ReadEnd) -> Optional[str]:
    # Empty RX values count as untagged
    return record.umi or None


def hamming_distance(umi1: str, umi2: str) -> int:
    """Number of positions at which two equal-length UMIs differ."""
    if len(umi1) != len(umi2):
        raise MalformedTagError(f"UMI lengths do not match: {umi1} and {umi2}",
                                umis=[umi1, umi2])
    return sum(1 for a, b in zip(umi1, umi2) if a != b)


def distinct_umis(records: List[ReadEnd]) -> List[str]:
    """Distinct UMIs in order of first observation, skipping untagged reads."""
    seen = set()
    umis = []
    for record in records:
        umi = _umi_of(record)
        if umi is not None and umi not in seen:
            seen.add(umi)
            umis.append(umi)
    return umis


def check_umi_lengths(umis: List[str]) -> None:
    lengths = sorted({len(umi) for umi in umis})
    if len(lengths) > 1:
        raise MalformedTagError(
            f"UMI lengths do not match within duplicate set: found lengths {lengths} "
            f"among {len(umis)} distinct UMIs",
            umis=list(umis))


def build_umi_adjacency(umis: List[str]) -> List[List[int]]:
    """
    Build adjacency lists over distinct UMIs.

    Node i is linked to node j (i != j) when the UMIs differ at no more than
    MAX_UMI_DISTANCE positions. Neighbour lists are in ascending index order.

    Raises:
        MalformedTagError: if the UMIs are not all the same length
    """
    n = len(umis)
    if n == 0:
        return []
    check_umi_lengths(umis)

    # (n, L) character matrix; pairwise mismatch counts in one pass
    codes = np.array([list(umi) for umi in umis])
    mismatches = (codes[:, None, :] != codes[None, :, :]).sum(axis=2)
    close = mismatches <= MAX_UMI_DISTANCE
    np.fill_diagonal(close, False)

    return [[int(j) for j in np.flatnonzero(close[i])] for i in range(n)]


def assign_umi_clusters(adjacency: List[List[int]]) -> List[int]:
    """
    Label connected components of the UMI graph.

    Components are numbered from 1 in the order their first node appears, so the
    numbering only depends on the order of the adjacency lists. Uses an explicit
    stack so large duplicate sets cannot hit the recursion limit.

    Returns:
        Cluster id for each node
    """
    groups = [0] * len(adjacency)
    n_groups = 0

    for start in range(len(adjacency)):
        if groups[start]:
            continue
        n_groups += 1
        stack = [start]
        while stack:
            node = stack.pop()
            if groups[node]:
                continue
            groups[node] = n_groups
            stack.extend(neighbor for neighbor in reversed(adjacency[node])
                         if not groups[neighbor])

    return groups


def split_by_umi(duplicate_set: DuplicateSet) -> List[DuplicateSet]:
    """
    Break a duplicate set into sub-sets whose UMIs are within MAX_UMI_DISTANCE
    of each other (transitively).

    A set with no UMIs at all is returned unchanged as the only element. Sub-sets
    are ordered by cluster id and keep the input order of their members. Reads
    without a UMI in an otherwise tagged set go into one extra trailing sub-set.

    Raises:
        MalformedTagError: if UMIs in the set differ in length; no sub-sets are
            produced in that case
    """
    records = duplicate_set.records
    umis = distinct_umis(records)
    if not umis:
        return [duplicate_set]

    adjacency = build_umi_adjacency(umis)
    cluster_ids = assign_umi_clusters(adjacency)
    umi_to_cluster = dict(zip(umis, cluster_ids))

    buckets: List[List[ReadEnd]] = [[] for _ in range(max(cluster_ids))]
    untagged: List[ReadEnd] = []
    for record in records:
        umi = _umi_of(record)
        if umi is None:
            untagged.append(record)
        else:
            buckets[umi_to_cluster[umi] - 1].append(record)

    subsets = [DuplicateSet(bucket) for bucket in buckets]
    if untagged:
        logging.debug(f"{len(untagged)} of {len(records)} reads have no UMI; "
                      f"keeping them as a separate duplicate set")
        subsets.append(DuplicateSet(untagged))

    if len(subsets) > 1:
        logging.debug(f"Split duplicate set of {len(records)} reads with {len(umis)} distinct UMIs "
                      f"into {len(subsets)} sets: {[len(s) for s in subsets]}")
    return subsets
