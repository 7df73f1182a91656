"""Domain layer: pattern compiler, options, results, errors."""
