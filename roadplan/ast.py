from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Span:
    line: int
    col: int


@dataclass
class Stmt:
    kind: str
    span: Span
    data: Dict[str, Any] = field(default_factory=dict)
    opts: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Connection:
    start: str
    end: str
    name: Optional[str]
    span: Span

    @property
    def road_name(self) -> str:
        return self.name if self.name is not None else f"{self.start}-{self.end}"


@dataclass
class Network:
    stmts: List[Stmt] = field(default_factory=list)

    @property
    def title(self) -> Optional[str]:
        for stmt in self.stmts:
            if stmt.kind == 'plan':
                return stmt.data['title']
        return None

    def of_kind(self, *kinds: str) -> List[Stmt]:
        return [stmt for stmt in self.stmts if stmt.kind in kinds]

    def connections(self) -> List[Connection]:
        """Forward connections declared by ``road`` and ``roads`` statements, in order."""
        out: List[Connection] = []
        for stmt in self.of_kind('road', 'roads'):
            if stmt.kind == 'road':
                a, b = stmt.data['edge']
                out.append(Connection(a, b, stmt.opts.get('name'), stmt.span))
            else:
                ids = stmt.data['ids']
                for a, b in zip(ids, ids[1:]):
                    out.append(Connection(a, b, None, stmt.span))
        return out
