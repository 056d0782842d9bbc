from sqlalchemy.dialects import postgresql

from app.core.dependencies import group_lock_query


def test_group_lock_selects_for_update():
    sql = str(group_lock_query(7).compile(dialect=postgresql.dialect()))

    assert "FROM groups" in sql
    assert sql.rstrip().endswith("FOR UPDATE")
