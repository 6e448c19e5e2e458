from abc import ABCMeta, abstractmethod


class Reporter(metaclass=ABCMeta):  # pragma: no cover
    """
    A reporter to be used by the profiler once the dump is analysed.
    """

    @abstractmethod
    def report(self, critical_path, profile=None):
        """
        Report the result of a run.

        :param critical_path: list of frame names, from the outermost frame to the leaf
        :param profile: the profile the critical path was computed from
        :return: True if something was reported; False otherwise.
        """
        pass
