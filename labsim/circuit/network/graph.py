from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Generic, Hashable, Iterable, List, Set, TypeVar

V = TypeVar("V", bound=Hashable)


@dataclass(frozen=True, order=True)
class TerminalRef:
    """
    Address of a connection point on a component.

    Terminals own no state: a terminal is identified by the component it
    belongs to and by its name in that component's fixed layout.

    Attributes:
        component: Id of the owning component.
        terminal: Terminal name (e.g. "positive", "left", "A").
    """
    component: str
    terminal: str

    def to_dict(self) -> dict:
        return {"component": self.component, "terminal": self.terminal}

    @classmethod
    def from_dict(cls, data: dict) -> TerminalRef:
        component = data.get("component", data.get("itemId"))
        if component is None or "terminal" not in data:
            raise ValueError(f"Malformed terminal reference: {data!r}")
        return cls(str(component), str(data["terminal"]))


@dataclass(frozen=True)
class Wire:
    """
    Ideal, symmetric conductor between two terminals.

    Wires have no resistance and no capacity limit; any number of them may
    touch the same terminal. Dataclass equality compares the id and the ends
    as drawn; ``ends`` gives the direction-free view.
    """
    id: str
    a: TerminalRef
    b: TerminalRef

    @property
    def ends(self) -> frozenset[TerminalRef]:
        return frozenset((self.a, self.b))

    def touches(self, component_id: str) -> bool:
        return self.a.component == component_id or self.b.component == component_id

    def other_end(self, ref: TerminalRef) -> TerminalRef | None:
        if self.a == ref:
            return self.b
        if self.b == ref:
            return self.a
        return None

    def to_dict(self) -> dict:
        return {"id": self.id, "from": self.a.to_dict(), "to": self.b.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> Wire:
        try:
            return cls(str(data["id"]), TerminalRef.from_dict(data["from"]), TerminalRef.from_dict(data["to"]))
        except KeyError as exc:
            raise ValueError(f"Malformed wire: missing {exc}") from exc


@dataclass
class UndirectedGraph(Generic[V]):
    """
    Adjacency-list graph shared by the topology builder and the classifier.

    The topology builder uses terminals as vertices and wires as edges; the
    wiring classifier uses component ids as vertices. Parallel edges collapse
    and self-loops are ignored, so duplicated wires never change reachability.

    Attributes:
        adjacency: Mapping vertex -> set of neighbouring vertices.
    """
    adjacency: Dict[V, Set[V]] = field(default_factory=dict)

    def add_vertex(self, v: V) -> None:
        self.adjacency.setdefault(v, set())

    def add_edge(self, u: V, v: V) -> None:
        """
        Add an undirected edge, registering both endpoints if needed.
        """
        self.add_vertex(u)
        self.add_vertex(v)
        if u == v:
            return
        self.adjacency[u].add(v)
        self.adjacency[v].add(u)

    def neighbors(self, v: V) -> Set[V]:
        return self.adjacency.get(v, set())

    def __contains__(self, v: object) -> bool:
        return v in self.adjacency

    def cluster(self, start: V) -> List[V]:
        """
        Return every vertex reachable from ``start`` (itself included).

        Vertices are returned in breadth-first discovery order.
        """
        seen = {start}
        order = [start]
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for nxt in self.neighbors(current):
                if nxt not in seen:
                    seen.add(nxt)
                    order.append(nxt)
                    queue.append(nxt)
        return order

    def has_path(self, source: V, target: V, exclude: Iterable[V] = ()) -> bool:
        """
        Breadth-first search from ``source`` to ``target``.

        Args:
            source: Start vertex.
            target: Vertex to reach.
            exclude: Vertices the search may not traverse.

        Returns:
            True if ``target`` is reachable without visiting any excluded vertex.
        """
        blocked = set(exclude)
        if source in blocked or target in blocked:
            return False
        if source == target:
            return True
        visited = {source}
        queue = deque([source])
        while queue:
            current = queue.popleft()
            for nxt in self.neighbors(current):
                if nxt == target:
                    return True
                if nxt in visited or nxt in blocked:
                    continue
                visited.add(nxt)
                queue.append(nxt)
        return False
