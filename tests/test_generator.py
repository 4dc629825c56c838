from __future__ import annotations

import pytest

from entropyforge.config import Config
from entropyforge.core import generator as generator_module
from entropyforge.core.errors import (
    EmptyCharsetError,
    InsufficientRandomnessError,
    NoEntropyCollectedError,
    RandomSourceError,
)
from entropyforge.core.expander import expand
from entropyforge.core.generator import PasswordGenerator, system_random_source
from entropyforge.core.mixer import combine
from entropyforge.core.pool import EntropyPool
from entropyforge.core.quality import character_frequency_test
from entropyforge.core.selector import build_charset, build_password


def test_no_entropy_fails_before_rng_and_digest(recording_source) -> None:
    class GuardedPool(EntropyPool):
        def digest_snapshot(self):
            raise AssertionError("digest must not be read")

    gen = PasswordGenerator(GuardedPool(), random_source=recording_source)
    with pytest.raises(NoEntropyCollectedError):
        gen.generate("abc", 8)
    assert recording_source.calls == 0


def test_empty_charset_fails_before_stream(seeded_pool, recording_source, monkeypatch) -> None:
    def no_expand(*args, **kwargs):
        raise AssertionError("stream must not be produced")

    monkeypatch.setattr(generator_module, "expand", no_expand)
    gen = PasswordGenerator(seeded_pool, random_source=recording_source)
    with pytest.raises(EmptyCharsetError):
        gen.generate("", 8)
    assert recording_source.calls == 0


def test_generate_matches_manual_pipeline(seeded_pool, recording_source) -> None:
    charset = build_charset()
    digest = seeded_pool.digest_snapshot()

    gen = PasswordGenerator(seeded_pool, random_source=recording_source, margin_factor=4)
    password = gen.generate(charset, 20)

    seed = combine(digest, bytes([recording_source.fill]) * 32)
    expected = build_password(expand(seed, 80), charset, 20)
    assert password == expected
    assert recording_source.calls == 1


def test_generate_credits_pool(seeded_pool, recording_source) -> None:
    gen = PasswordGenerator(seeded_pool, random_source=recording_source)
    gen.generate("abcdef", 12)
    assert seeded_pool.collected_bits_estimate() == 2 + 16


def test_generate_does_not_change_digest(seeded_pool, recording_source) -> None:
    before = seeded_pool.digest_snapshot()
    PasswordGenerator(seeded_pool, random_source=recording_source).generate("abc", 5)
    assert seeded_pool.digest_snapshot() == before


def test_default_length(seeded_pool, recording_source) -> None:
    gen = PasswordGenerator(seeded_pool, random_source=recording_source, default_length=24)
    assert len(gen.generate("abcdef")) == 24


def test_invalid_length(seeded_pool, recording_source) -> None:
    gen = PasswordGenerator(seeded_pool, random_source=recording_source)
    with pytest.raises(ValueError):
        gen.generate("abc", 0)
    assert recording_source.calls == 0


def test_invalid_margin_factor(pool) -> None:
    with pytest.raises(ValueError):
        PasswordGenerator(pool, margin_factor=0)


def test_margin_too_small_is_reported(seeded_pool) -> None:
    # With a single-byte stream per character, any rejected byte exhausts it.
    gen = PasswordGenerator(seeded_pool, margin_factor=1)
    with pytest.raises(InsufficientRandomnessError):
        for _ in range(200):
            gen.generate("abc", 64)


def test_random_source_failure_propagates(seeded_pool) -> None:
    def broken(n: int) -> bytes:
        raise OSError("entropy device unavailable")

    gen = PasswordGenerator(seeded_pool, random_source=broken)
    with pytest.raises(RandomSourceError) as exc_info:
        gen.generate("abc", 8)
    assert isinstance(exc_info.value.__cause__, OSError)
    assert seeded_pool.collected_bits_estimate() == 2


def test_random_source_short_read(seeded_pool) -> None:
    gen = PasswordGenerator(seeded_pool, random_source=lambda n: b"\x00" * (n - 1))
    with pytest.raises(RandomSourceError):
        gen.generate("abc", 8)


def test_buffers_wiped_on_success(seeded_pool, recording_source, monkeypatch) -> None:
    captured = {}

    def spy_combine(digest, external):
        captured['digest'], captured['external'] = digest, external
        captured['seed'] = combine(digest, external)
        return captured['seed']

    def spy_expand(seed, n):
        captured['stream'] = expand(seed, n)
        return captured['stream']

    monkeypatch.setattr(generator_module, "combine", spy_combine)
    monkeypatch.setattr(generator_module, "expand", spy_expand)

    PasswordGenerator(seeded_pool, random_source=recording_source).generate("abc", 8)

    assert captured['digest'] == bytearray(32)
    assert captured['external'] == bytearray(32)
    assert captured['seed'] == bytearray(32)
    assert not captured['stream'].any()


def test_stream_wiped_on_error(seeded_pool, recording_source, monkeypatch) -> None:
    captured = {}

    def spy_expand(seed, n):
        captured['stream'] = expand(seed, n)
        return captured['stream']

    def failing_build(stream, charset, length):
        raise InsufficientRandomnessError(0, length, len(stream))

    monkeypatch.setattr(generator_module, "expand", spy_expand)
    monkeypatch.setattr(generator_module, "build_password", failing_build)

    with pytest.raises(InsufficientRandomnessError):
        PasswordGenerator(seeded_pool, random_source=recording_source).generate("abc", 8)
    assert not captured['stream'].any()
    assert seeded_pool.collected_bits_estimate() == 2


def test_generate_from_options(seeded_pool, recording_source) -> None:
    gen = PasswordGenerator(seeded_pool, random_source=recording_source)
    password = gen.generate_from_options(length=32, lower=False, upper=False,
                                         symbols=False, exclude_ambiguous=True)
    assert len(password) == 32
    assert set(password) <= set("23456789")

    with pytest.raises(EmptyCharsetError):
        gen.generate_from_options(lower=False, upper=False, digits=False, symbols=False)


def test_from_config(tmp_path, seeded_pool, recording_source) -> None:
    config = Config(tmp_path / "config.json")
    config.set('generator', 'length', 10)
    config.set('generator', 'symbols', False)

    gen = PasswordGenerator.from_config(seeded_pool, config, random_source=recording_source)
    password = gen.generate_from_options()
    assert len(password) == 10
    assert set(password) <= set(build_charset(symbols=False))
    assert gen.margin_factor == 4


def test_system_random_source() -> None:
    data = system_random_source(32)
    assert isinstance(data, bytes)
    assert len(data) == 32


def test_generated_passwords_are_unbiased(seeded_pool) -> None:
    charset = build_charset(exclude_ambiguous=False)
    gen = PasswordGenerator(seeded_pool)
    text = ''.join(gen.generate(charset, 64) for _ in range(300))
    assert character_frequency_test(text, charset, alpha=0.0001)['passed']


def test_passwords_differ_between_calls(seeded_pool) -> None:
    gen = PasswordGenerator(seeded_pool)
    passwords = {gen.generate(build_charset(), 16) for _ in range(20)}
    assert len(passwords) == 20


def test_reset_during_generation_does_not_use_empty_pool(seeded_pool) -> None:
    digest = seeded_pool.digest_snapshot()

    def resetting_source(n: int) -> bytes:
        seeded_pool.reset()
        return b"\x11" * n

    password = PasswordGenerator(seeded_pool, random_source=resetting_source).generate("abcd", 12)

    seed = combine(digest, b"\x11" * 32)
    assert password == build_password(expand(seed, 48), "abcd", 12)
    assert seeded_pool.has_collected_sample() is False
    assert seeded_pool.collected_bits_estimate() == 0


def test_reset_before_snapshot_is_rejected(seeded_pool, recording_source, monkeypatch) -> None:
    # Pool empties between the quick gate and the locked snapshot.
    real_snapshot = seeded_pool.seeded_snapshot

    def reset_then_snapshot():
        seeded_pool.reset()
        return real_snapshot()

    monkeypatch.setattr(seeded_pool, "seeded_snapshot", reset_then_snapshot)
    with pytest.raises(NoEntropyCollectedError):
        PasswordGenerator(seeded_pool, random_source=recording_source).generate("abc", 8)
    assert recording_source.calls == 0


def test_none_options_keep_configured_defaults(tmp_path, seeded_pool) -> None:
    config = Config(tmp_path / "config.json")
    config.set('generator', 'lower', False)
    config.set('generator', 'symbols', False)
    config.set('generator', 'exclude_ambiguous', False)

    gen = PasswordGenerator.from_config(seeded_pool, config)
    text = ''.join(gen.generate_from_options(length=100, exclude_ambiguous=None)
                   for _ in range(10))

    assert set(text) <= set(build_charset(lower=False, symbols=False, exclude_ambiguous=False))
    assert set(text) & set("IO01")


def test_explicit_option_overrides_config(tmp_path, seeded_pool, recording_source) -> None:
    config = Config(tmp_path / "config.json")
    config.set('generator', 'exclude_ambiguous', False)

    gen = PasswordGenerator.from_config(seeded_pool, config, random_source=recording_source)
    password = gen.generate_from_options(length=64, lower=False, upper=False,
                                         symbols=False, exclude_ambiguous=True)
    assert set(password) <= set("23456789")


def test_unknown_option_is_rejected(seeded_pool) -> None:
    with pytest.raises(TypeError):
        PasswordGenerator(seeded_pool).generate_from_options(symbol=False)
