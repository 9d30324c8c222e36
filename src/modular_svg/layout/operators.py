"""Layout operator catalog.

Every operator is an immutable value holding resolved slot offsets into the
flat geometry buffer (4 slots per entity: x, y, width, height). `eval` reads
only `cur` and writes a proposal for each slot in `slots` into `nxt`; the
solver blends proposals back into the live state.

A SlotPair is (position slot, size slot) along one axis of one entity.
"""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass
from typing import Protocol

from modular_svg.types import Alignment, Axis

SlotPair = tuple[int, int]


class Operator(Protocol):
    """Protocol shared by the whole catalog."""

    @property
    def slots(self) -> tuple[int, ...]:
        """Every slot this operator writes."""
        ...

    def eval(self, cur: Sequence[float], nxt: MutableSequence[float]) -> None:
        """Write proposed values for `slots` into `nxt`, reading `cur` only."""
        ...


def _positions(pairs: tuple[SlotPair, ...]) -> tuple[int, ...]:
    return tuple(pos for pos, _ in pairs)


# ─── Align ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class AlignMin:
    """AlignLeft / AlignTop: move every position to the smallest one."""

    positions: tuple[int, ...]

    @property
    def slots(self) -> tuple[int, ...]:
        return self.positions

    def eval(self, cur: Sequence[float], nxt: MutableSequence[float]) -> None:
        if not self.positions:
            return
        lowest = min(cur[i] for i in self.positions)
        for i in self.positions:
            nxt[i] = lowest


@dataclass(frozen=True)
class AlignMax:
    """AlignRight / AlignBottom: line up the far edges on the largest one."""

    pairs: tuple[SlotPair, ...]

    @property
    def slots(self) -> tuple[int, ...]:
        return _positions(self.pairs)

    def eval(self, cur: Sequence[float], nxt: MutableSequence[float]) -> None:
        if not self.pairs:
            return
        edge = max(cur[pos] + cur[size] for pos, size in self.pairs)
        for pos, size in self.pairs:
            nxt[pos] = edge - cur[size]


@dataclass(frozen=True)
class AlignCenter:
    """Move every center to the mean of the current centers."""

    pairs: tuple[SlotPair, ...]

    @property
    def slots(self) -> tuple[int, ...]:
        return _positions(self.pairs)

    def eval(self, cur: Sequence[float], nxt: MutableSequence[float]) -> None:
        if not self.pairs:
            return
        mean = sum(cur[pos] + cur[size] / 2 for pos, size in self.pairs) / len(self.pairs)
        for pos, size in self.pairs:
            nxt[pos] = mean - cur[size] / 2


@dataclass(frozen=True)
class AlignCenterTo:
    """Center every entry on the anchor's center. The anchor is not moved."""

    anchor: SlotPair
    pairs: tuple[SlotPair, ...]

    @property
    def slots(self) -> tuple[int, ...]:
        return _positions(self.pairs)

    def eval(self, cur: Sequence[float], nxt: MutableSequence[float]) -> None:
        anchor_pos, anchor_size = self.anchor
        center = cur[anchor_pos] + cur[anchor_size] / 2
        for pos, size in self.pairs:
            nxt[pos] = center - cur[size] / 2


# ─── Distribute ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Distribute:
    """Spread entries along one axis.

    spacing == 0: first and last positions (the current min and max) stay put
    and the rest are evenly spaced between them.
    spacing > 0: the last entry stays put and each earlier entry is placed
    `size + spacing` before the one after it.
    """

    pairs: tuple[SlotPair, ...]
    spacing: float = 0.0

    @property
    def slots(self) -> tuple[int, ...]:
        return _positions(self.pairs)

    def eval(self, cur: Sequence[float], nxt: MutableSequence[float]) -> None:
        n = len(self.pairs)
        if n < 2:
            return
        if self.spacing > 0:
            anchor_pos, _ = self.pairs[-1]
            at = cur[anchor_pos]
            nxt[anchor_pos] = at
            for pos, size in reversed(self.pairs[:-1]):
                at -= cur[size] + self.spacing
                nxt[pos] = at
            return
        values = [cur[pos] for pos, _ in self.pairs]
        lo, hi = min(values), max(values)
        gap = (hi - lo) / (n - 1)
        for i, (pos, _) in enumerate(self.pairs):
            nxt[pos] = lo + i * gap


# ─── Stack ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Stack:
    """StackV (axis=Y) / StackH (axis=X).

    Children are laid out from 0 along the main axis, `spacing` apart, and
    placed on the cross axis against the container's current cross size.
    The container gets the total main extent and the largest cross size.
    """

    axis: Axis
    children: tuple[int, ...]
    container: int
    spacing: float = 0.0
    alignment: Alignment = Alignment.START

    @property
    def slots(self) -> tuple[int, ...]:
        cross = self.axis.cross
        owned: list[int] = []
        for base in self.children:
            owned.append(base + self.axis.pos)
            owned.append(base + cross.pos)
        owned.append(self.container + self.axis.size)
        owned.append(self.container + cross.size)
        return tuple(owned)

    def eval(self, cur: Sequence[float], nxt: MutableSequence[float]) -> None:
        main, cross = self.axis, self.axis.cross
        room = cur[self.container + cross.size]
        offset = 0.0
        widest = 0.0
        for base in self.children:
            extent = cur[base + main.size]
            thickness = cur[base + cross.size]
            if self.alignment is Alignment.CENTER:
                across = (room - thickness) / 2
            elif self.alignment is Alignment.END:
                across = room - thickness
            else:
                across = 0.0
            nxt[base + main.pos] = offset
            nxt[base + cross.pos] = across
            offset += extent + self.spacing
            if thickness > widest:
                widest = thickness
        nxt[self.container + main.size] = offset - self.spacing if self.children else 0.0
        nxt[self.container + cross.size] = widest


# ─── Background ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class BackgroundOp:
    """Box = child grown by `padding` on all four sides."""

    child: int
    box: int
    padding: float = 0.0

    @property
    def slots(self) -> tuple[int, ...]:
        return (self.box, self.box + 1, self.box + 2, self.box + 3)

    def eval(self, cur: Sequence[float], nxt: MutableSequence[float]) -> None:
        nxt[self.box] = cur[self.child] - self.padding
        nxt[self.box + 1] = cur[self.child + 1] - self.padding
        nxt[self.box + 2] = cur[self.child + 2] + self.padding * 2
        nxt[self.box + 3] = cur[self.child + 3] + self.padding * 2


def stack_v(children: tuple[int, ...], container: int, spacing: float = 0.0, alignment: Alignment = Alignment.START) -> Stack:
    return Stack(Axis.Y, children, container, spacing, alignment)


def stack_h(children: tuple[int, ...], container: int, spacing: float = 0.0, alignment: Alignment = Alignment.START) -> Stack:
    return Stack(Axis.X, children, container, spacing, alignment)
