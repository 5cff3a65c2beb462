def test_import_packforge_package() -> None:
    import importlib

    module = importlib.import_module("packforge")
    assert module is not None


def test_import_rng_no_side_effects() -> None:
    from packforge.core.rng import RNG

    rng = RNG(42)
    value = rng.next_int(0, 2)
    assert value in (0, 1)


def test_package_roots_are_namespace_packages() -> None:
    import importlib

    for name in ("packforge", "packforge.core", "packforge.domain", "packforge.presentation"):
        module = importlib.import_module(name)
        assert getattr(module, "__file__", None) is None
