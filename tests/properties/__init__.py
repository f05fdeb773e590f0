from properties.generators import (
    GeneratorConfig,
    GeneratorMode,
    SequenceGenerator,
    SimilarSequenceGenerator,
    EdgeCaseGenerator,
    TestCaseGenerator,
    DiffTestCase,
    as_text,
    generate_random_sequences,
    generate_similar_sequences,
    generate_edge_cases,
    generate_test_cases
)

from properties.benchmark import (
    BenchmarkResult,
    Timer,
    DataGenerator,
    Benchmark,
    ScalingBenchmark,
    AlgorithmComparison,
    run_quick_benchmark,
    run_full_benchmark
)


__all__ = [
    "GeneratorConfig",
    "GeneratorMode",
    "SequenceGenerator",
    "SimilarSequenceGenerator",
    "EdgeCaseGenerator",
    "TestCaseGenerator",
    "DiffTestCase",
    "as_text",
    "generate_random_sequences",
    "generate_similar_sequences",
    "generate_edge_cases",
    "generate_test_cases",
    "BenchmarkResult",
    "Timer",
    "DataGenerator",
    "Benchmark",
    "ScalingBenchmark",
    "AlgorithmComparison",
    "run_quick_benchmark",
    "run_full_benchmark"
]
