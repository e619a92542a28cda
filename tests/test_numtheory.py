# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import math

import pytest
import sympy

from blockrsa import numtheory
from blockrsa.errors import NoInverseError
from blockrsa.randomness import RandomSource

CARMICHAELS_BELOW_10000 = [561, 1105, 1729, 2465, 2821, 6601, 8911]
FERMAT_TOLERANCE = 5

base_primetest_cases = [
    # Edge Cases (neither)
    (-7, False),
    (0, False),
    (1, False),
    # Known Primes
    (2, True),
    (3, True),
    (5, True),
    (101, True),
    (3571, True),
    (9973, True),
    (2**61 - 1, True),
    (2**127 - 1, True),
    # Composite
    (4, False),
    (6, False),
    (9, False),
    (2**64, False),
    ((2**61 - 1) * (2**31 - 1), False),
]


def id_generator(param):
    if isinstance(param, int) and param > 1000000:
        return f"LargeInt-{param.bit_length()}bits"
    return str(param)


@pytest.mark.parametrize("base,exp,mod", [
    (4, 13, 497),
    (0, 0, 7),
    (0, 5, 7),
    (7, 0, 13),
    (-3, 5, 11),
    (123456789, 987654321, 1),
    (2, 2**100 + 1, 2**127 - 1),
    (3**200, 65537, 10**50 + 151),
])
def test_mod_pow_matches_builtin(base, exp, mod):
    assert numtheory.mod_pow(base, exp, mod) == pow(base, exp, mod)


def test_mod_pow_known_oracle():
    # p=7, q=11, e=7 -> d=43. 33 is a fixed point of this key.
    assert numtheory.mod_inverse(7, 60) == 43
    assert numtheory.mod_pow(33, 43, 77) == 33
    assert numtheory.mod_pow(33, 7, 77) == 33


@pytest.mark.parametrize("exp,mod", [(1, 0), (1, -5), (-1, 7)])
def test_mod_pow_validates(exp, mod):
    with pytest.raises(ValueError):
        numtheory.mod_pow(3, exp, mod)


def test_extended_gcd_base_case():
    assert numtheory.extended_gcd(0, 17) == (17, 0, 1)


@pytest.mark.parametrize("a,b", [(240, 46), (46, 240), (17, 0), (65537, 3120), (2**521 - 1, 2**127 - 1), (12, 18)])
def test_extended_gcd_bezout(a, b):
    g, x, y = numtheory.extended_gcd(a, b)
    assert g == math.gcd(a, b)
    assert a * x + b * y == g


def test_extended_gcd_large_operands():
    # Consecutive Fibonacci numbers are the worst case for the number of division steps.
    a, b = 1, 1
    for _ in range(5000):
        a, b = b, a + b
    g, x, y = numtheory.extended_gcd(b, a)
    assert g == 1
    assert b * x + a * y == 1


@pytest.mark.parametrize("e,phi", [(7, 60), (65537, 3120), (3, 10**40 + 1), (65537 + 120, 120), (1, 1)])
def test_mod_inverse(e, phi):
    d = numtheory.mod_inverse(e, phi)
    assert 0 <= d < phi
    assert (e * d) % phi == 1 % phi


@pytest.mark.parametrize("e,phi", [(6, 9), (65537, 65537 * 4), (0, 12)])
def test_mod_inverse_missing(e, phi):
    with pytest.raises(NoInverseError):
        numtheory.mod_inverse(e, phi)
    with pytest.raises(ArithmeticError):
        numtheory.mod_inverse(e, phi)


@pytest.mark.parametrize("phi", [0, -3])
def test_mod_inverse_validates(phi):
    with pytest.raises(ValueError):
        numtheory.mod_inverse(3, phi)


@pytest.mark.parametrize("n,expected", base_primetest_cases, ids=id_generator)
def test_is_probable_prime_cases(n, expected, rng):
    assert numtheory.is_probable_prime(n, 5, rng) == expected


def test_is_probable_prime_accepts_all_small_primes(rng):
    for p in sympy.primerange(2, 10000):
        assert numtheory.is_probable_prime(p, 5, rng), p


def test_is_probable_prime_rejects_small_composites(rng):
    false_positives = [
        n for n in range(4, 10000)
        if not sympy.isprime(n) and n not in CARMICHAELS_BELOW_10000 and numtheory.is_probable_prime(n, 5, rng)
    ]
    # Fermat liars exist for most odd composites, a handful may slip through five rounds.
    assert len(false_positives) <= FERMAT_TOLERANCE, false_positives


@pytest.mark.parametrize("carmichael", CARMICHAELS_BELOW_10000)
def test_is_probable_prime_carmichael_coprime_witness(mocker, carmichael, rng):
    # Every witness coprime to a Carmichael number is a liar; the test accepts it. Known limitation.
    mocker.patch.object(rng, "randbelow", return_value=0)
    assert numtheory.is_probable_prime(carmichael, 5, rng)


def test_is_probable_prime_carmichael_shared_factor(mocker, rng):
    mocker.patch.object(rng, "randbelow", return_value=1)  # Witness 3 divides 561.
    assert not numtheory.is_probable_prime(561, 5, rng)


def test_is_probable_prime_witness_range(mocker, rng):
    spy = mocker.spy(rng, "randbelow")
    assert numtheory.is_probable_prime(9973, 7, rng)
    assert spy.call_count == 7
    spy.assert_called_with(9973 - 3)


def test_is_probable_prime_stops_on_first_failure(mocker, rng):
    spy = mocker.spy(rng, "randbelow")
    mocker.patch.object(numtheory, "mod_pow", return_value=2)
    assert not numtheory.is_probable_prime(9973, 5, rng)
    assert spy.call_count == 1


def test_is_probable_prime_uses_default_source(mocker):
    src = RandomSource(1)
    mocker.patch("blockrsa.numtheory.default_source", return_value=src)
    spy = mocker.spy(src, "randbelow")
    assert numtheory.is_probable_prime(101, 3)
    assert spy.call_count == 3


@pytest.mark.parametrize("rounds", [0, -1])
def test_is_probable_prime_validates(rounds):
    with pytest.raises(ValueError):
        numtheory.is_probable_prime(101, rounds)


@pytest.mark.parametrize("bits", [1, 2, 7, 8, 63, 64, 65, 128, 1024])
def test_random_bits_length(bits, rng):
    for _ in range(50):
        assert numtheory.random_bits(bits, rng).bit_length() == bits


def test_random_bits_varies(rng):
    draws = {numtheory.random_bits(64, rng) for _ in range(100)}
    assert len(draws) > 95


@pytest.mark.parametrize("bits", [0, -8])
def test_random_bits_validates(bits):
    with pytest.raises(ValueError):
        numtheory.random_bits(bits)
