from enum import Enum, auto


class MachineStatus(Enum):
    """Lifecycle of a state machine runtime.

    A machine is idle between transition attempts and in flight from the moment
    an attempt acquires the execution guard until its observers have been told.
    There is no terminal status.
    """

    IDLE = auto()  # Ready to accept a transition
    TRANSITION_IN_FLIGHT = auto()  # Guard held; handler, commit or broadcast running
