"""
Modules
-------

.. automodule:: jstack_profiler.profiler
   :members:

.. automodule:: jstack_profiler.model.call_graph_node
   :members:

"""

__profiler_version__ = "1.0.0"

from .model.call_graph_node import CallGraphNode
from .model.thread_state import ThreadState, InvalidThreadStateError
from .profiler import Profiler
