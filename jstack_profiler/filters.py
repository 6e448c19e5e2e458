"""
Predicates to be used with CallGraphNode.filter. Each of them receives the list of nodes going from the first frame
of a call stack down to its last frame (the leaf).
"""


def all_frames_contain(word):
    def predicate(call_stack):
        return all(word in node.name for node in call_stack)

    return predicate


def leaf_in_state(state):
    def predicate(call_stack):
        return bool(call_stack) and call_stack[-1].state is state

    return predicate


def all_of(*predicates):
    def predicate(call_stack):
        return all(p(call_stack) for p in predicates)

    return predicate


def contains_word_in_state(word, state):
    """
    Keeps the call stacks where every frame contains the given word and which end in the given thread state,
    e.g. contains_word_in_state("com.example", ThreadState.TIMED_WAITING).
    """
    return all_of(all_frames_contain(word), leaf_in_state(state))


def build_call_stack_filter(word=None, state=None):
    """
    :return: the predicate combining the given criteria, or None if no criteria is given
    """
    predicates = []
    if word:
        predicates.append(all_frames_contain(word))
    if state is not None:
        predicates.append(leaf_in_state(state))
    if not predicates:
        return None
    return all_of(*predicates)
