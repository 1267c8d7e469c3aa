"""
DOF Motion Events - Motion events with 1, 2, 3 and 6 degrees of freedom.

Higher-DOF events reduce to lower-DOF ones (6 -> 3 -> 2 -> 1) so that a
grabber that only understands planar motion can still consume the output of
a six-axis device. Reductions are lossy: they keep some axes and discard the
rest. See MotionEvent._reduce for how distance, delay and speed carry over.

Examples:
    >>> prev = MotionEvent2(x=1, y=2, timestamp=0.0)
    >>> e = MotionEvent2.from_previous(prev, x=4, y=6, timestamp=0.5)
    >>> (e.dx, e.dy, e.distance, e.speed)
    (3.0, 4.0, 5.0, 10.0)
    >>> e.event1(from_x=False).dx
    4.0
"""
from typing import ClassVar

from gestura.events.event import EventKind
from gestura.events.motion import MotionEvent


class MotionEvent1(MotionEvent):
    """Motion event with one degree of freedom (x), e.g. a scroll wheel."""
    kind: ClassVar[EventKind] = EventKind.MOTION1
    axes: ClassVar[tuple] = ('x',)

    x: float = 0.0
    dx: float = 0.0

    @property
    def previous_x(self) -> float:
        return self.x - self.dx


class MotionEvent2(MotionEvent):
    """Motion event with two degrees of freedom (x, y), e.g. a mouse."""
    kind: ClassVar[EventKind] = EventKind.MOTION2
    axes: ClassVar[tuple] = ('x', 'y')

    x: float = 0.0
    y: float = 0.0
    dx: float = 0.0
    dy: float = 0.0

    @property
    def previous_x(self) -> float:
        return self.x - self.dx

    @property
    def previous_y(self) -> float:
        return self.y - self.dy

    def event1(self, from_x: bool = True) -> MotionEvent1:
        """Reduce to a MotionEvent1 keeping x, or y when from_x is False."""
        return self._reduce(MotionEvent1, ('x',) if from_x else ('y',))


class MotionEvent3(MotionEvent):
    """Motion event with three degrees of freedom (x, y, z)."""
    kind: ClassVar[EventKind] = EventKind.MOTION3
    axes: ClassVar[tuple] = ('x', 'y', 'z')

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    dx: float = 0.0
    dy: float = 0.0
    dz: float = 0.0

    @property
    def previous_x(self) -> float:
        return self.x - self.dx

    @property
    def previous_y(self) -> float:
        return self.y - self.dy

    @property
    def previous_z(self) -> float:
        return self.z - self.dz

    def event2(self) -> MotionEvent2:
        """Reduce to a MotionEvent2 keeping x and y and discarding z."""
        return self._reduce(MotionEvent2, ('x', 'y'))


class MotionEvent6(MotionEvent):
    """Motion event with six degrees of freedom, e.g. a 3D mouse.

    x, y and z are translations; rx, ry and rz are rotations, also
    available as roll, pitch and yaw.
    """
    kind: ClassVar[EventKind] = EventKind.MOTION6
    axes: ClassVar[tuple] = ('x', 'y', 'z', 'rx', 'ry', 'rz')

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    rx: float = 0.0
    ry: float = 0.0
    rz: float = 0.0
    dx: float = 0.0
    dy: float = 0.0
    dz: float = 0.0
    drx: float = 0.0
    dry: float = 0.0
    drz: float = 0.0

    @property
    def roll(self) -> float:
        return self.rx

    @property
    def pitch(self) -> float:
        return self.ry

    @property
    def yaw(self) -> float:
        return self.rz

    @property
    def previous_x(self) -> float:
        return self.x - self.dx

    @property
    def previous_y(self) -> float:
        return self.y - self.dy

    @property
    def previous_z(self) -> float:
        return self.z - self.dz

    @property
    def previous_rx(self) -> float:
        return self.rx - self.drx

    @property
    def previous_ry(self) -> float:
        return self.ry - self.dry

    @property
    def previous_rz(self) -> float:
        return self.rz - self.drz

    def event3(self, from_translation: bool = True) -> MotionEvent3:
        """Reduce to a MotionEvent3 keeping the translation axes, or the
        rotation axes when from_translation is False."""
        source = ('x', 'y', 'z') if from_translation else ('rx', 'ry', 'rz')
        return self._reduce(MotionEvent3, source)
