"""Performance benchmarks for symopt hot paths: compilation and gradient evaluation."""
