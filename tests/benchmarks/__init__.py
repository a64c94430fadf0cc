"""Logger throughput benchmarks (pytest-benchmark).

Run with::

    pytest tests/benchmarks/bench_logger.py --benchmark-sort=median

or as plain functional tests with ``--benchmark-disable``.
"""
