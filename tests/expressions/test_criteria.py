"""Tests for dbapiext.expressions.Criteria: conjunctions, nesting and removal."""

from dbapiext.expressions import Criteria, Criterion, ParameterizedCriterion


def test_empty_criteria_renders_nothing():
    assert Criteria().to_sql() == ""
    assert not Criteria().is_many()


def test_default_conjunction_is_or():
    criteria = Criteria()
    criteria.add_criterion("a", 1)
    criteria.add_criterion("b", 2)
    assert criteria.to_sql() == '"a" = 1\nOR "b" = 2'
    assert criteria.is_many()


def test_set_conjunction():
    criteria = Criteria()
    criteria.add_criterion("a", 1)
    criteria.add_criterion("b", 2)
    criteria.set_conjunction_and()
    assert criteria.to_sql() == '"a" = 1\nAND "b" = 2'
    criteria.set_conjunction_or()
    assert criteria.to_sql() == '"a" = 1\nOR "b" = 2'


def test_nested_criteria_are_parenthesized():
    criteria = Criteria("AND")
    criteria.add_criterion("a", 1)
    inner = Criteria()
    inner.add_criterion("b", 2)
    inner.add_criterion("c", 3)
    criteria.add_criterion(inner)
    assert criteria.to_sql() == '"a" = 1\nAND ("b" = 2\nOR "c" = 3)'


def test_nested_single_criterion_is_not_parenthesized():
    criteria = Criteria("AND")
    criteria.add_criterion("a", 1)
    inner = Criteria()
    inner.add_criterion("b", 2)
    criteria.add_criterion(inner)
    assert criteria.to_sql() == '"a" = 1\nAND "b" = 2'


def test_empty_nested_criteria_are_skipped():
    criteria = Criteria("AND")
    criteria.add_criterion("a", 1)
    criteria.add_criterion(Criteria())
    assert criteria.to_sql() == '"a" = 1'


def test_add_criterion_returns_the_node():
    criteria = Criteria()
    criterion = criteria.add_criterion("a", 1)
    assert isinstance(criterion, Criterion)
    assert criteria.criteria == [criterion]


def test_add_constraint():
    criteria = Criteria()
    criteria.add_constraint("users.id", "tracks.user_id")
    assert criteria.to_sql() == '"users"."id" = "tracks"."user_id"'


def test_where_with_placeholders():
    criteria = Criteria("AND").where("age > ? AND age < ?", 18, 65)
    assert isinstance(criteria.criteria[0], ParameterizedCriterion)
    assert criteria.to_sql() == "age > 18 AND age < 65"


def test_where_chains():
    criteria = Criteria("AND").where("name", "Anna").where("age", 18, ">=")
    assert criteria.to_sql() == "\"name\" = 'Anna'\nAND \"age\" >= 18"


def test_remove_criterion():
    criteria = Criteria("AND")
    criteria.add_criterion("a", 1)
    criteria.add_criterion("b", 2)
    criteria.remove_criterion("a", 1)
    assert criteria.to_sql() == '"b" = 2'


def test_remove_criterion_object():
    criteria = Criteria("AND")
    criterion = criteria.add_criterion("a", 1)
    criteria.remove_criterion_object(Criterion("a", 1))
    assert criteria.criteria == []
    criteria.add_criterion_object(criterion)
    criteria.remove_criterion(criterion)
    assert criteria.to_sql() == ""
