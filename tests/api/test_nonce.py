# tests/api/test_nonce.py

from krakenbot.api.nonce import NonceGenerator


def test_nonce_seeded_from_clock():
    gen = NonceGenerator(clock=lambda: 1_700_000_000_000)
    assert gen.last == 1_700_000_000_000


def test_nonce_strictly_increasing_within_same_millisecond():
    gen = NonceGenerator(clock=lambda: 1_700_000_000_000)
    values = [gen.next() for _ in range(1000)]
    assert all(b > a for a, b in zip(values, values[1:]))
    assert values[0] == 1_700_000_000_001


def test_nonce_follows_clock_when_it_advances():
    ticks = iter([1000, 1000, 1000, 5000, 5000])
    gen = NonceGenerator(clock=lambda: next(ticks))
    assert [gen.next() for _ in range(4)] == [1001, 1002, 5000, 5001]


def test_nonce_never_regresses_when_clock_goes_back():
    ticks = iter([5000, 4000, 3000])
    gen = NonceGenerator(clock=lambda: next(ticks))
    assert gen.next() == 5001
    assert gen.next() == 5002


def test_default_clock_gives_millisecond_values():
    gen = NonceGenerator()
    first = gen.next()
    assert first > 10 ** 12  # au-delà de 32 bits
    assert gen.next() > first
