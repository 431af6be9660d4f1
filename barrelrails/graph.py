"""
Barrel dependency graph and cycle detection.

Barrels found under a root get stable integer indices in lexical path
order; edges are stored as adjacency lists over those indices and paths
are only looked up again for reporting. The graph is rebuilt from disk on
every run.
"""

import logging
import posixpath
from dataclasses import dataclass, field
from pathlib import Path

from .classifier import is_relative, strip_package
from .config import Config
from .directives import compile_directive_pattern
from .errors import ConfigError
from .models import BarrelRole, FeatureIdentity

logger = logging.getLogger(__name__)

# Tool and VCS directories never hold feature code
SKIP_DIRECTORIES = frozenset({
    ".git", ".dart_tool", ".idea", ".vscode", "build", "node_modules",
    "__pycache__", ".venv", "venv",
})


@dataclass(frozen=True)
class BarrelNode:
    path: str  # relative to the graph root, "/"-separated
    feature: FeatureIdentity
    role: BarrelRole

    @property
    def file_name(self) -> str:
        return self.path.rsplit("/", 1)[-1]


@dataclass
class BarrelGraph:
    root: Path
    nodes: list[BarrelNode] = field(default_factory=list)
    edges: list[list[int]] = field(default_factory=list)
    index: dict[str, int] = field(default_factory=dict)

    def add_node(self, node: BarrelNode) -> int:
        if node.path in self.index:
            return self.index[node.path]
        self.index[node.path] = len(self.nodes)
        self.nodes.append(node)
        self.edges.append([])
        return self.index[node.path]

    def add_edge(self, source: int, target: int) -> bool:
        """Add ``source -> target``; self-edges and repeats are dropped."""
        if source == target or target in self.edges[source]:
            return False
        self.edges[source].append(target)
        return True

    def path_of(self, i: int) -> str:
        return self.nodes[i].path

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.edges)

    def edge_list(self) -> list[tuple[str, str]]:
        return [
            (self.path_of(src), self.path_of(dst))
            for src, targets in enumerate(self.edges)
            for dst in targets
        ]


@dataclass(frozen=True)
class Cycle:
    """Closed walk ``v0 -> v1 -> ... -> v0`` over barrel paths."""

    nodes: tuple[str, ...]

    @property
    def members(self) -> tuple[str, ...]:
        return self.nodes[:-1]

    def __len__(self) -> int:
        return len(self.members)


def _source_files(root: Path, extensions: tuple[str, ...]) -> list[str]:
    files = []
    for path in root.rglob("*"):
        rel = path.relative_to(root)
        if any(part in SKIP_DIRECTORIES for part in rel.parts[:-1]):
            continue
        if path.is_file() and path.name.endswith(extensions):
            files.append(rel.as_posix())
    return sorted(files)


def discover_barrels(root: Path, config: Config) -> list[BarrelNode]:
    """Monolithic and layer-specific barrels under ``root``, in path order."""
    classifier = config.classifier
    barrels = []
    for rel in _source_files(root, config.extensions):
        feature = classifier.classify(rel)
        role = classifier.role_of(rel, feature)
        if role.is_barrel:
            barrels.append(BarrelNode(rel, feature, role))
    return barrels


class _Resolver:
    """Maps export references of one graph to node indices."""

    def __init__(self, graph: BarrelGraph, config: Config):
        self.graph = graph
        self.classifier = config.classifier
        self.by_feature: dict[tuple[str, str], int] = {}
        for i, node in enumerate(graph.nodes):
            self.by_feature.setdefault((node.feature.feature_directory, node.file_name), i)

    def resolve(self, source: BarrelNode, uri: str) -> int | None:
        package = strip_package(uri)
        if package is not None:
            rest = package[1]
            if rest in self.graph.index:
                return self.graph.index[rest]
            feature = self.classifier.classify(rest)
            if feature is None or not self.classifier.role_of(rest, feature).is_barrel:
                return None
            return self.by_feature.get((feature.feature_directory, rest.rsplit("/", 1)[-1]))
        if is_relative(uri):
            target = posixpath.normpath(posixpath.join(posixpath.dirname(source.path), uri))
            return self.graph.index.get(target)
        return None


def build_graph(root: Path | str, config: Config | None = None) -> BarrelGraph:
    """Scan ``root`` and connect monolithic barrels to the barrels they export.

    Raises ConfigError when ``root`` is not a directory.
    """
    config = config or Config()
    root = Path(root)
    if not root.is_dir():
        raise ConfigError(f"Directory not found: {root}")

    graph = BarrelGraph(root)
    for node in discover_barrels(root, config):
        graph.add_node(node)
    logger.info("Found %d barrel files", len(graph.nodes))

    pattern = compile_directive_pattern(config.export_pattern)
    resolver = _Resolver(graph, config)
    for i, node in enumerate(graph.nodes):
        # Layer barrels are targets only; the audit is per whole feature
        if not node.role.is_monolithic:
            continue
        try:
            text = (root / node.path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping unreadable barrel %s: %s", node.path, e)
            continue
        for match in pattern.finditer(text):
            target = resolver.resolve(node, match.group("uri"))
            if target is not None:
                graph.add_edge(i, target)

    logger.info("Built dependency graph with %d nodes", len(graph.nodes))
    for i, targets in enumerate(graph.edges):
        if targets:
            logger.debug(
                "  %s → %s", graph.path_of(i), ", ".join(graph.path_of(t) for t in targets)
            )
    return graph


def find_cycles(graph: BarrelGraph) -> list[Cycle]:
    """Every cycle met by one depth-first pass, in discovery order.

    Roots are tried in index order and a visited node is never restarted,
    so each back edge yields exactly one cycle.
    """
    count = len(graph.nodes)
    visited = [False] * count
    on_stack = [False] * count
    cycles = []

    for start in range(count):
        if visited[start]:
            continue
        visited[start] = on_stack[start] = True
        path = [start]
        work = [iter(graph.edges[start])]
        while work:
            target = next(work[-1], None)
            if target is None:
                work.pop()
                on_stack[path.pop()] = False
                continue
            if on_stack[target]:
                loop = path[path.index(target):] + [target]
                cycles.append(Cycle(tuple(graph.path_of(k) for k in loop)))
            elif not visited[target]:
                visited[target] = on_stack[target] = True
                path.append(target)
                work.append(iter(graph.edges[target]))
    return cycles
