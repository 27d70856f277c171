import pytest

from corewar.arith import (
    compute_power_rec,
    compute_square_root,
    find_prime_sup,
    getnbr,
    intlen,
    is_prime,
    sort_int_array,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("42", 42),
        ("-42", -42),
        ("--42", 42),
        ("abc42", 42),
        ("12ab34", 12),
        ("7-", 7),
        ("abc", 0),
        ("", 0),
        ("2147483647", 2147483647),
        ("-2147483648", -2147483648),
    ],
)
def test_getnbr(text, expected):
    assert getnbr(text) == expected


def test_getnbr_overflow_returns_zero():
    assert getnbr("2147483648") == 0
    assert getnbr("-2147483649") == 0
    assert getnbr("99999999999") == 0


def test_intlen():
    assert intlen(-2147483648) == 11
    assert intlen(0) == 1
    assert intlen(-7) == 2


def test_compute_power_rec_edges():
    assert compute_power_rec(5, -1) == 0
    assert compute_power_rec(5, 0) == 1


@pytest.mark.parametrize("base", [-3, 2, 7])
def test_compute_power_rec_recurrence(base):
    for power in range(6):
        assert compute_power_rec(base, power + 1) == base * compute_power_rec(base, power)


def test_compute_square_root():
    for root in (0, 1, 9, 123, 46400):
        assert compute_square_root(root * root) == root
    assert compute_square_root(2) == 0
    assert compute_square_root(-4) == 0


def test_is_prime():
    primes = {2, 3, 5, 7, 11, 13, 17, 19, 23, 29}
    for n in range(-3, 30):
        assert is_prime(n) == (n in primes)


def test_find_prime_sup_limits():
    assert find_prime_sup(1) == 2
    assert find_prime_sup(-10) == 2
    assert find_prime_sup(2147483647) == 0


def test_find_prime_sup_is_smallest_prime_at_or_above():
    for n in range(2, 200):
        found = find_prime_sup(n)
        assert found >= n
        assert is_prime(found)
        assert not any(is_prime(k) for k in range(n, found))


def test_sort_int_array_in_place():
    values = [5, -1, 3, 3, 0]
    result = sort_int_array(values)
    assert result is values
    assert values == [-1, 0, 3, 3, 5]