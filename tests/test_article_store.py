from articletree.server.articles.store import ArticleStore


def _seed(store):
    store.create_article(article_id="1", title="Guides", slug="guides", content="root", parent_id=None)
    store.create_article(article_id="2", title="Install", slug="install", content="child", parent_id="1")
    store.create_article(article_id="3", title="Upgrade", slug="upgrade", content="child", parent_id="1")


def test_article_store_crud(tmp_path):
    store = ArticleStore(tmp_path / "articles.db")
    _seed(store)

    records = store.list_records()
    assert [record.id for record in records] == ["1", "2", "3"]
    assert records[1].parent_id == "1"

    fetched = store.get_by_slug("install")
    assert fetched is not None
    assert fetched.title == "Install"
    assert fetched.created_at is not None

    assert store.update_article("2", title="Setup", slug="setup", content="new", parent_id=None)
    updated = store.get_article("2")
    assert updated.slug == "setup"
    assert updated.parent_id is None
    assert store.get_by_slug("install") is None

    assert store.delete_article("3")
    assert not store.delete_article("3")
    assert store.get_article("3") is None

    store.delete_all()
    assert store.list_records() == []


def test_list_articles_newest_first_with_child_counts(tmp_path):
    store = ArticleStore(tmp_path / "articles.db")
    _seed(store)

    articles = store.list_articles()

    assert [article.id for article in articles] == ["3", "2", "1"]
    counts = {article.id: article.child_count for article in articles}
    assert counts == {"1": 2, "2": 0, "3": 0}


def test_slug_exists_honours_exclusion(tmp_path):
    store = ArticleStore(tmp_path / "articles.db")
    _seed(store)

    assert store.slug_exists("guides")
    assert not store.slug_exists("guides", exclude_id="1")
    assert store.slug_exists("guides", exclude_id="2")
    assert not store.slug_exists("missing")


def test_deleting_parent_promotes_children_to_roots(tmp_path):
    store = ArticleStore(tmp_path / "articles.db")
    _seed(store)

    store.delete_article("1")

    assert [record.parent_id for record in store.list_records()] == [None, None]


def test_update_missing_article_reports_false(tmp_path):
    store = ArticleStore(tmp_path / "nested" / "articles.db")

    assert not store.update_article("nope", title="T", slug="t", content="c", parent_id=None)
    assert (tmp_path / "nested" / "articles.db").exists()
