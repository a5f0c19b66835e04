"""Import depth over the reverse-import relation."""

from .models import ImportGraph


def compute_depths(graph: ImportGraph) -> list[int]:
    """Depth of every node: 1 + max depth of its importers, 1 if none.

    Iterative memoized DFS with an explicit stack, so long import chains
    cannot exhaust the Python call stack. An importer that is still on the
    stack is part of a cycle and contributes depth 1 instead of being
    re-entered; this under-estimates depth inside cycles but always
    terminates. Each node is finalised exactly once.
    """
    n = len(graph.files)
    memo = [0] * n  # 0 = not computed yet
    in_progress = [False] * n

    for root in range(n):
        if memo[root]:
            continue

        in_progress[root] = True
        # Frame: [node, importer iterator, deepest importer seen so far]
        stack: list[list] = [[root, iter(graph.importers[root]), 0]]

        while stack:
            frame = stack[-1]
            for importer in frame[1]:
                if memo[importer]:
                    frame[2] = max(frame[2], memo[importer])
                elif in_progress[importer]:
                    frame[2] = max(frame[2], 1)
                else:
                    in_progress[importer] = True
                    stack.append([importer, iter(graph.importers[importer]), 0])
                    break
            else:
                stack.pop()
                node = frame[0]
                depth = frame[2] + 1
                in_progress[node] = False
                memo[node] = depth
                if stack:
                    stack[-1][2] = max(stack[-1][2], depth)

    return memo
