from enum import Enum


class InvalidThreadStateError(ValueError):
    """
    Raised when a thread-state line carries a token that is not one of the six JVM thread states.
    """

    def __init__(self, token):
        super().__init__("Bad thread state: '{}'".format(token))
        self.token = token


class ThreadState(Enum):
    NEW = "NEW"
    RUNNABLE = "RUNNABLE"
    BLOCKED = "BLOCKED"
    WAITING = "WAITING"
    TIMED_WAITING = "TIMED_WAITING"
    TERMINATED = "TERMINATED"

    @classmethod
    def from_token(cls, token):
        """
        Converts the state token printed by jstack after "java.lang.Thread.State:" into a ThreadState.

        :param token: the state word, e.g. "TIMED_WAITING"
        :return: the matching ThreadState
        :raises InvalidThreadStateError: if the token is not a known state; we never fall back to a default state
        """
        try:
            return cls(token)
        except ValueError:
            raise InvalidThreadStateError(token) from None

    def rank(self):
        """
        Position of the state in declaration order; used to break ties deterministically.
        """
        return list(ThreadState).index(self)
