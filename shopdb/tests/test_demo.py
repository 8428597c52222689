"""Tests for the CRUD walkthrough."""

import logging

from ..commands.demo import run_demo
from ..dao import ProductDAO
from ..db.initializer import initialize_database

def test_demo_runs_every_step(pool, caplog):
    initialize_database(pool)
    dao = ProductDAO(pool)

    with caplog.at_level(logging.INFO):
        assert run_demo(pool, dao) is True

    assert "Active products: 9" in caplog.text
    assert "Pool status - active connections: 0" in caplog.text
    assert "Samsung Galaxy Tab S9" in caplog.text

def test_demo_leaves_catalog_unchanged(pool):
    initialize_database(pool)
    dao = ProductDAO(pool)
    before = dao.find_all()

    run_demo(pool, dao)

    assert dao.find_all() == before
    assert dao.find_by_name('Galaxy') == []
    assert dao.count_active_products() == 8

def test_demo_stops_on_database_error(pool, caplog):
    dao = ProductDAO(pool)

    with caplog.at_level(logging.INFO):
        assert run_demo(pool, dao) is False

    assert "Error during CRUD operations" in caplog.text
    assert "2. Products in category" not in caplog.text
