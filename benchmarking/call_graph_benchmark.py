# Call graph benchmark
# ====================
#
# This benchmark measures:
#
# * The performance of reducing a thread dump into per-thread call graphs and merging them
# * The memory overhead of the merged call graph
#
# It works by loading a jstack thread dump (INPUT_FILE) or, when none is given, by generating a synthetic dump of
# THREAD_COUNT threads whose stacks share a common prefix, which is what a thread pool typically looks like.
#
# By default this benchmark runs in the performance profiling mode; to get the memory information
# set the MEMORY_INFO environment variable to 1.
#
# How to run:
# * See `python benchmarking/call_graph_benchmark.py --help` for options
# * `PRINT_INFO=1 MEMORY_INFO=1 INPUT_FILE=threads.txt python benchmarking/call_graph_benchmark.py
#   --inherit-environ INPUT_FILE` prints both performance and memory info (after a default number of runs)
#
# Note: When testing multiple variants of some code that are toggled via an environment variable, the
# `--inherit-environ SOME_VARIABLE` option needs to be passed otherwise the variable is not correctly considered during
# the test runs.
#
# Dependencies:
#
# * pyperf - https://pypi.org/project/pyperf/
# * Pympler - https://pypi.org/project/Pympler/
#

import sys
import os
import random

import pyperf
from pympler import asizeof

from jstack_profiler.profiler import Profiler

# Increase recursion limit, to allow for deeper stacks
sys.setrecursionlimit(sys.getrecursionlimit() * 10)

INPUT_FILE = os.environ.get("INPUT_FILE")
PRINT_INFO = os.environ.get("PRINT_INFO") == "1"
MEMORY_INFO = os.environ.get("MEMORY_INFO") == "1"
THREAD_COUNT = int(os.environ.get("THREAD_COUNT", "2000"))
STACK_DEPTH = int(os.environ.get("STACK_DEPTH", "60"))
STATES = ["RUNNABLE", "BLOCKED", "WAITING", "TIMED_WAITING"]


def generate_dump_lines(thread_count=THREAD_COUNT, stack_depth=STACK_DEPTH, seed=42):
    rng = random.Random(seed)
    lines = []
    for thread_index in range(thread_count):
        lines.append('"pool-{}-thread-{}" #{} prio=5 os_prio=0 tid=0x{:x} nid=0x{:x} waiting on condition'.format(
            thread_index % 8, thread_index, thread_index, thread_index, thread_index))
        lines.append("   java.lang.Thread.State: " + rng.choice(STATES))
        depth = rng.randint(stack_depth // 2, stack_depth)
        # innermost first, like jstack prints them
        for frame_index in reversed(range(depth)):
            branch = rng.randint(0, 3) if frame_index > depth // 2 else 0
            lines.append("\tat com.example.layer{}.Service{}.call(Service{}.java:{})".format(
                frame_index, branch, branch, 10 + frame_index))
        lines.append("\tat java.lang.Thread.run(Thread.java:748)")
        lines.append("")
    return lines


def load_dump_lines():
    if not INPUT_FILE:
        return generate_dump_lines()
    with open(INPUT_FILE, "r", encoding="utf-8", errors="replace") as dump_file:
        return dump_file.readlines()


DUMP_LINES = load_dump_lines()


def profile_and_merge(dump_lines=DUMP_LINES):
    profiler = Profiler()
    profile = profiler.profile_lines(dump_lines)
    return profile, profile.merged_call_graph()


def print_stats_for(profile, call_graph):
    print("Profile number of threads: " + str(len(profile.call_graphs_per_thread)))
    print("Profile number of samples: " + str(call_graph.count))
    maximum_object_graph_depth_for_measurement = 2**32
    print("Merged call graph size (bytes): " + str(
        asizeof.asizeof(call_graph, limit=maximum_object_graph_depth_for_measurement)))


if PRINT_INFO:
    print("Using python " + sys.version)
    print("Dump lines: " + str(len(DUMP_LINES)))

if MEMORY_INFO:
    print("Getting memory info...")
    print_stats_for(*profile_and_merge())

runner = pyperf.Runner()
runner.bench_func("profile_and_merge", profile_and_merge)
