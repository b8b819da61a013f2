from __future__ import annotations


class SchedulerError(Exception):
    """
    Base class for errors that terminate a simulation run.
    """


class InvalidInput(SchedulerError, ValueError):
    """
    Rejected workload or configuration. Raised before any simulation state is built.
    """


class ResourceExhaustion(SchedulerError, RuntimeError):
    """
    The timeline or ready sequence could not grow. Fatal for the run.
    """
