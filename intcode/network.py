"""Packet network of cooperating Intcode computers.

Every computer boots with its network address as first input. A computer
sends a packet by emitting three values: destination address, X and Y.
Received packets are read back as X then Y. Reading from an empty queue
yields ``-1`` once per scheduler visit; after that the computer suspends
until the next visit.

Packets for address 255 go to the NAT, which keeps only the most recent
one. When a full round-robin pass moves no packets and every computer was
starved, the NAT sends its packet to address 0 to wake the network up.
"""

from __future__ import annotations

import collections
import logging
from dataclasses import dataclass, field
from typing import Deque, Iterable, List, Optional

from .computer import Computer
from .errors import NetworkError
from .io import ProgramIO

LOGGER = logging.getLogger("intcode.network")

NAT_ADDRESS = 255
IDLE_SENTINEL = -1
PACKET_SIZE = 3
DEFAULT_NETWORK_SIZE = 50
DEFAULT_MAX_PASSES = 100_000


@dataclass(frozen=True)
class Packet:
    source: int
    destination: int
    x: int
    y: int


class PacketQueue(ProgramIO):
    """Network interface card for one computer."""

    def __init__(self, address: int) -> None:
        self.address = address
        self.pending: Deque[int] = collections.deque()
        self.sent: Deque[Packet] = collections.deque()
        self.received = 0
        self._partial: List[int] = []
        self._sentinel_armed = False

    def deliver(self, packet: Packet) -> None:
        self.pending.extend((packet.x, packet.y))
        self.received += 1

    def offer_sentinel(self) -> None:
        """Allow one ``-1`` read while the queue is empty."""
        self._sentinel_armed = True

    def input(self) -> Optional[int]:
        if self.pending:
            return self.pending.popleft()
        if self._sentinel_armed:
            self._sentinel_armed = False
            return IDLE_SENTINEL
        return None

    def output(self, value: int) -> None:
        self._partial.append(value)
        if len(self._partial) == PACKET_SIZE:
            destination, x, y = self._partial
            self._partial = []
            self.sent.append(Packet(self.address, destination, x, y))

    @property
    def has_partial_packet(self) -> bool:
        return bool(self._partial)

    def drain(self) -> List[Packet]:
        packets = list(self.sent)
        self.sent.clear()
        return packets


@dataclass
class Nat:
    """Idle-break controller. Remembers only the latest packet sent to it."""

    packet: Optional[Packet] = None
    last_wake_y: Optional[int] = None
    wake_history: List[int] = field(default_factory=list)

    def receive(self, packet: Packet) -> None:
        self.packet = packet


@dataclass
class NetworkNode:
    computer: Computer
    nic: PacketQueue

    @property
    def address(self) -> int:
        return self.nic.address


class Network:
    """Round-robin scheduler for a fleet of networked computers."""

    def __init__(
        self,
        program: Iterable[int],
        size: int = DEFAULT_NETWORK_SIZE,
        *,
        max_passes: int = DEFAULT_MAX_PASSES,
        trace: bool = False,
    ) -> None:
        if size <= 0:
            raise NetworkError(f"network size must be positive, got {size}", value=size)
        cells = list(program)
        self.max_passes = max(1, int(max_passes))
        self.nat = Nat()
        self.nodes: List[NetworkNode] = []
        for address in range(size):
            nic = PacketQueue(address)
            computer = Computer(cells, io=nic, trace=trace, name=f"nic{address}")
            computer.input(address)
            self.nodes.append(NetworkNode(computer, nic))
        self.passes = 0
        self.packets_routed = 0
        self.idle = False

    def _route(self, packet: Packet) -> None:
        self.packets_routed += 1
        if packet.destination == NAT_ADDRESS:
            LOGGER.debug("nat <- %s", packet)
            self.nat.receive(packet)
            return
        if not 0 <= packet.destination < len(self.nodes):
            raise NetworkError(
                f"nic{packet.source} sent a packet to unknown address {packet.destination}",
                value=packet.destination,
            )
        target = self.nodes[packet.destination]
        if target.computer.is_done():
            LOGGER.debug("nic%d has halted, %s will not be read", target.address, packet)
        else:
            LOGGER.debug("route %s", packet)
        target.nic.deliver(packet)

    def _visit(self, node: NetworkNode) -> List[Packet]:
        computer = node.computer
        if computer.is_done():
            return []
        if computer.is_waiting() and not node.nic.pending:
            node.nic.offer_sentinel()
        computer.run()
        if node.nic.has_partial_packet:
            raise NetworkError(f"nic{node.address} produced an incomplete packet", pc=computer.pc)
        return node.nic.drain()

    def run_pass(self, *, stop_at_nat: bool = False) -> Optional[Packet]:
        """Visit every node once, routing packets as they are produced.

        Returns the first packet sent to the NAT when ``stop_at_nat`` is set,
        otherwise ``None``. With ``stop_at_nat`` the pass ends after the node
        that sent it, once the rest of that node's packets are routed. Sets
        :attr:`idle` for the pass. Packets queued for a halted node are never
        read and do not keep the network busy.
        """
        self.passes += 1
        active = False
        for node in self.nodes:
            if node.nic.pending and not node.computer.is_done():
                active = True
            to_nat: Optional[Packet] = None
            for packet in self._visit(node):
                active = True
                self._route(packet)
                if stop_at_nat and to_nat is None and packet.destination == NAT_ADDRESS:
                    to_nat = packet
            if to_nat is not None:
                return to_nat
        self.idle = not active
        return None

    def _check_budget(self) -> None:
        if self.passes >= self.max_passes:
            raise NetworkError(f"network still running after {self.passes} passes", value=self.passes)

    def first_packet_to_nat(self) -> int:
        """Run until some computer sends to address 255 and return that packet's Y."""
        while True:
            self._check_budget()
            packet = self.run_pass(stop_at_nat=True)
            if packet is not None:
                return packet.y

    def run_until_repeat(self) -> int:
        """Run with the NAT active and return the first Y it delivers twice in a row."""
        while True:
            self._check_budget()
            self.run_pass()
            if not self.idle or self.nat.packet is None:
                continue
            packet = self.nat.packet
            wake = Packet(NAT_ADDRESS, 0, packet.x, packet.y)
            LOGGER.info("network idle after pass %d; nat wakes nic0 with y=%d", self.passes, packet.y)
            self.nodes[0].nic.deliver(wake)
            self.nat.wake_history.append(packet.y)
            if self.nat.last_wake_y == packet.y:
                return packet.y
            self.nat.last_wake_y = packet.y
