"""
CryptoNoise Quality - Statistical uniformity checks for sources and noise.
"""

from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
from scipy import special, stats

from cryptonoise.core.entropy import RandomSource, SystemRandomSource
from cryptonoise.core.generator import ALPHANUMERIC, SYMBOLS, NoiseGenerator, NoiseParams
from cryptonoise.core.log import get_logger

logger = get_logger('quality')

ALPHA = 0.01


def _bucket_counts(values: Iterable, categories: List) -> np.ndarray:
    """Count occurrences of each category, in category order."""
    counter = Counter(values)
    return np.array([counter.get(c, 0) for c in categories], dtype=np.int64)


def _chi_square_result(name: str, observed: np.ndarray, alpha: float) -> Dict[str, Any]:
    """Chi-square goodness of fit against a flat distribution."""
    if observed.sum() == 0:
        return {
            'name': name,
            'p_value': 0.0,
            'passed': False,
            'statistic': None,
            'note': 'No observations'
        }

    chi2, p_value = stats.chisquare(observed)
    return {
        'name': name,
        'p_value': float(p_value),
        'passed': bool(p_value >= alpha),
        'statistic': float(chi2),
        'counts': observed.tolist()
    }


class UniformityTests:
    """Frequency-bucket and chi-square tests for noise generation."""

    @staticmethod
    def range_test(source: RandomSource, low: int, high: int,
                   draws: int = 10000, alpha: float = ALPHA) -> Dict[str, Any]:
        """
        Test 1: Range bounds and uniformity of randint(low, high).

        Any draw outside [low, high] fails the test outright. A single-value
        range has no distribution to test and passes when every draw hits it.
        """
        values = np.array([source.randint(low, high) for _ in range(draws)], dtype=np.int64)
        out_of_range = int(np.sum((values < low) | (values > high)))
        name = f'Range [{low}, {high}]'

        if out_of_range:
            return {
                'name': name,
                'p_value': 0.0,
                'passed': False,
                'statistic': None,
                'out_of_range': out_of_range
            }

        if low == high:
            return {'name': name, 'p_value': 1.0, 'passed': True, 'statistic': 0.0}

        observed = np.bincount(values - low, minlength=high - low + 1)
        result = _chi_square_result(name, observed, alpha)
        result['out_of_range'] = 0
        return result

    @staticmethod
    def monobit_test(source: RandomSource, n_bytes: int = 10000,
                     alpha: float = ALPHA) -> Dict[str, Any]:
        """Test 2: Frequency (Monobit) test over raw source bytes."""
        bits = np.unpackbits(source.random_bytes(n_bytes))
        n = len(bits)
        s = 2 * np.sum(bits, dtype=np.int64) - n
        s_obs = abs(s) / np.sqrt(n)
        p_value = special.erfc(s_obs / np.sqrt(2))

        return {
            'name': 'Frequency (Monobit)',
            'p_value': float(p_value),
            'passed': bool(p_value >= alpha),
            'statistic': float(s_obs)
        }

    @staticmethod
    def length_test(noises: List[str], params: Optional[NoiseParams] = None,
                    alpha: float = ALPHA) -> Dict[str, Any]:
        """Test 3: Noise lengths are uniform over [min_length, max_length]."""
        params = params or NoiseParams()
        lengths = [len(n) for n in noises]
        categories = list(range(params.min_length, params.max_length + 1))

        if any(length not in categories for length in lengths):
            return {
                'name': 'Noise Length',
                'p_value': 0.0,
                'passed': False,
                'statistic': None,
                'note': 'Length outside extraction window'
            }
        if len(categories) == 1:
            return {'name': 'Noise Length', 'p_value': 1.0, 'passed': True, 'statistic': 0.0}

        return _chi_square_result('Noise Length', _bucket_counts(lengths, categories), alpha)

    @staticmethod
    def symbol_frequency_test(noises: List[str], alpha: float = ALPHA) -> Dict[str, Any]:
        """Test 4: Symbol characters are uniform within the symbol pool."""
        chars = [c for n in noises for c in n if c in SYMBOLS]
        return _chi_square_result('Symbol Frequency', _bucket_counts(chars, list(SYMBOLS)), alpha)

    @staticmethod
    def alphanumeric_frequency_test(noises: List[str], alpha: float = ALPHA) -> Dict[str, Any]:
        """Test 5: Alphanumeric characters are uniform within their pool."""
        chars = [c for n in noises for c in n if c in ALPHANUMERIC]
        return _chi_square_result(
            'Alphanumeric Frequency', _bucket_counts(chars, list(ALPHANUMERIC)), alpha
        )

    @classmethod
    def run_all_tests(cls, source: Optional[RandomSource] = None, samples: int = 2000,
                      verbose: bool = True, params: Optional[NoiseParams] = None):
        """
        Run the full uniformity suite against a generator.

        Args:
            source: Random source under test (default: system CSPRNG)
            samples: Number of noise values to generate
            verbose: Log one line per test
            params: Shape constants for the generator

        Returns:
            Dictionary with test results
        """
        source = source if source is not None else SystemRandomSource()
        params = params or NoiseParams()
        generator = NoiseGenerator(source, params)
        noises = [generator.generate() for _ in range(samples)]

        tests = [
            cls.range_test(source, 0, 0, draws=1000),
            cls.range_test(source, params.min_length, params.max_length),
            cls.monobit_test(source),
            cls.length_test(noises, params),
            cls.symbol_frequency_test(noises),
            cls.alphanumeric_frequency_test(noises),
        ]

        passed = sum(1 for t in tests if t['passed'])
        total = len(tests)

        if verbose:
            logger.info("UNIFORMITY TESTS - %d noise samples", samples)
            logger.info("p-value threshold: %.2f", ALPHA)

            for test in tests:
                status = "PASS" if test['passed'] else "FAIL"
                logger.info("%s  %-30s p-value: %.6f", status, test['name'], test['p_value'])

            logger.info("Result: %d/%d tests passed (%.1f%%)", passed, total, passed / total * 100)

            if passed < total:
                logger.warning("Non-uniform output detected - NOT recommended for secret use")

        return {
            'tests': tests,
            'passed': passed,
            'total': total,
            'pass_rate': passed / total if tests else 0
        }
