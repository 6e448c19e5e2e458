from jstack_profiler.filters import all_frames_contain, leaf_in_state, all_of, contains_word_in_state, \
    build_call_stack_filter
from jstack_profiler.model.call_graph_node import CallGraphNode
from jstack_profiler.model.thread_state import ThreadState


def _call_stack(*names, state=ThreadState.RUNNABLE):
    nodes = [CallGraphNode(name) for name in names[:-1]]
    return nodes + [CallGraphNode(names[-1], state)]


class TestAllFramesContain:
    def test_it_matches_when_every_frame_contains_the_word(self):
        assert all_frames_contain("example")(_call_stack("com.example.A.a(A.java:1)", "com.example.B.b(B.java:2)"))

    def test_it_does_not_match_when_one_frame_does_not_contain_the_word(self):
        assert not all_frames_contain("example")(_call_stack("com.example.A.a(A.java:1)", "java.lang.Thread.sleep"))


class TestLeafInState:
    def test_it_checks_the_state_of_the_last_node(self):
        call_stack = _call_stack("a", "b", state=ThreadState.TIMED_WAITING)

        assert leaf_in_state(ThreadState.TIMED_WAITING)(call_stack)
        assert not leaf_in_state(ThreadState.BLOCKED)(call_stack)

    def test_it_does_not_match_an_empty_call_stack(self):
        assert not leaf_in_state(ThreadState.RUNNABLE)([])


class TestAllOf:
    def test_it_needs_every_predicate(self):
        assert all_of(lambda s: True, lambda s: True)([])
        assert not all_of(lambda s: True, lambda s: False)([])


class TestContainsWordInState:
    def test_it_keeps_only_the_matching_leaves_of_a_graph(self):
        graph = CallGraphNode.new_root() \
            .update(["com.example.A.a(A.java:1)", "com.example.B.b(B.java:2)"], ThreadState.TIMED_WAITING) \
            .update(["com.example.A.a(A.java:1)", "com.example.C.c(C.java:3)"], ThreadState.BLOCKED) \
            .update(["com.example.A.a(A.java:1)", "java.lang.Thread.sleep(Native Method)"], ThreadState.TIMED_WAITING)

        filtered = graph.filter(contains_word_in_state("com.example", ThreadState.TIMED_WAITING))

        assert filtered.paths() == [("com.example.A.a(A.java:1)", "com.example.B.b(B.java:2)")]
        assert filtered.count == 1


class TestBuildCallStackFilter:
    def test_without_criteria_it_returns_none(self):
        assert build_call_stack_filter() is None

    def test_with_a_word_only(self):
        predicate = build_call_stack_filter(word="example")

        assert predicate(_call_stack("com.example.A.a(A.java:1)", state=ThreadState.BLOCKED))
        assert not predicate(_call_stack("java.lang.Thread.sleep(Native Method)"))

    def test_with_a_state_only(self):
        predicate = build_call_stack_filter(state=ThreadState.BLOCKED)

        assert predicate(_call_stack("anything", state=ThreadState.BLOCKED))
        assert not predicate(_call_stack("anything", state=ThreadState.RUNNABLE))

    def test_with_both(self):
        predicate = build_call_stack_filter(word="example", state=ThreadState.BLOCKED)

        assert predicate(_call_stack("com.example.A.a(A.java:1)", state=ThreadState.BLOCKED))
        assert not predicate(_call_stack("com.example.A.a(A.java:1)", state=ThreadState.RUNNABLE))
        assert not predicate(_call_stack("java.lang.Thread.sleep(Native Method)", state=ThreadState.BLOCKED))
