import os
import sys
import logging

from jstack_profiler.profiler_builder import build_profiler, get_log_level


def _set_log_level(log_level):
    if log_level is None:
        return
    numeric_level = getattr(logging, log_level.upper(), None)
    if isinstance(numeric_level, int):
        logging.basicConfig(level=numeric_level)


def main(input_args=sys.argv[1:], env=os.environ, output=None, profiler_builder=build_profiler):
    """
    :return: the critical path that was printed, or None if only the usage was printed
    """
    from argparse import ArgumentParser
    usage = 'jstack-profiler [--log level] [--contains word] [--state state] [--threads] <jstack output file>'
    epilog = 'example: jstack-profiler --contains com.example --state TIMED_WAITING threads.txt'
    parser = ArgumentParser(prog="jstack-profiler", usage=usage, epilog=epilog)
    parser.add_argument('--contains', dest='filter_word',
                        help='Only keep the call stacks where every frame contains this word')
    parser.add_argument('--state', dest='filter_state',
                        help='Only keep the call stacks of threads in this state, possible values: NEW, RUNNABLE,'
                             + ' BLOCKED, WAITING, TIMED_WAITING and TERMINATED')
    parser.add_argument('--threads', dest='show_threads', action='store_true', default=False,
                        help='Also print the threads ranked by number of samples')
    parser.add_argument('--log', dest='log_level',
                        help='Set log level, possible values: debug, info, warning, error and critical'
                             + ' (default is warning)')
    parser.add_argument('dump_file', nargs='?', help='File containing the output of jstack')

    args = parser.parse_args(args=input_args)
    _set_log_level(get_log_level(args.log_level, env))

    if args.dump_file is None:
        parser.print_usage(file=output or sys.stdout)
        return None

    profiler = profiler_builder(filter_word=args.filter_word, filter_state=args.filter_state,
                                show_threads=args.show_threads, output=output, env=env)
    return profiler.run(args.dump_file)


if __name__ == "__main__":
    main()
