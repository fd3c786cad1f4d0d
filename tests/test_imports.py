def test_import_rngarena_package() -> None:
    import importlib

    module = importlib.import_module("rngarena")
    assert module is not None


def test_import_rng_no_side_effects() -> None:
    from rngarena.core.rng import RNG

    rng = RNG(42)
    value = rng.roll_die(2)
    assert value in (1, 2)
