import threading

from dashboard.utils.render_cache import (
    RenderCache,
    get_render_cache,
    revalidate_path,
)


def test_get_or_render_renders_once():
    cache = RenderCache()
    calls = []

    def render():
        calls.append(1)
        return "<p>rendered</p>"

    assert cache.get_or_render("/dashboard/invoices", "", render) == "<p>rendered</p>"
    assert cache.get_or_render("/dashboard/invoices", "", render) == "<p>rendered</p>"
    assert len(calls) == 1


def test_variants_are_cached_separately():
    cache = RenderCache()
    cache.set("/dashboard/invoices", "page=1", "one")
    cache.set("/dashboard/invoices", "page=2", "two")
    assert cache.get("/dashboard/invoices", "page=1") == "one"
    assert cache.get("/dashboard/invoices", "page=2") == "two"
    assert len(cache) == 2


def test_revalidate_drops_only_matching_path():
    cache = RenderCache()
    cache.set("/dashboard/invoices", "page=1", "one")
    cache.set("/dashboard/invoices", "page=2", "two")
    cache.set("/dashboard/customers", "", "customers")

    assert cache.revalidate("/dashboard/invoices") == 2
    assert cache.get("/dashboard/invoices", "page=1") is None
    assert cache.get("/dashboard/customers") == "customers"
    assert cache.revalidate("/dashboard/invoices") == 0


def test_concurrent_sets_and_revalidations():
    cache = RenderCache()

    def writer(n):
        for i in range(100):
            cache.set("/dashboard/invoices", f"{n}-{i}", "x")
            if i % 10 == 0:
                cache.revalidate("/dashboard/invoices")

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    cache.revalidate("/dashboard/invoices")
    assert len(cache) == 0


def test_app_cache_is_shared_and_revalidated(app):
    with app.app_context():
        cache = get_render_cache()
        assert cache is app.extensions["render_cache"]
        cache.set("/dashboard/invoices", "", "cached")
        assert revalidate_path("/dashboard/invoices") == 1
        assert cache.get("/dashboard/invoices") is None
