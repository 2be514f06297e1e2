"""Tests for dbapiext.expressions.ParameterizedCriterion: positional placeholders."""

import pytest

from dbapiext.dialects import MysqlDialect
from dbapiext.errors import TooFewParameters, TooManyParameters
from dbapiext.expressions import Literal, ParameterizedCriterion


def test_placeholders_are_replaced_in_order():
    criterion = ParameterizedCriterion("age > ? AND name = ?", [18, "Anna"])
    assert criterion.to_sql() == "age > 18 AND name = 'Anna'"


def test_list_parameter_expands():
    assert ParameterizedCriterion("id IN (?)", [[1, 2]]).to_sql() == "id IN (1, 2)"


def test_expression_parameter_is_inlined():
    criterion = ParameterizedCriterion("created < ?", [Literal("now()")])
    assert criterion.to_sql() == "created < now()"


def test_null_parameter():
    assert ParameterizedCriterion("x = ?", [None]).to_sql() == "x = NULL"


def test_escaped_for_dialect():
    criterion = ParameterizedCriterion("name = ?", ["O'Hara"])
    assert criterion.to_sql(MysqlDialect()) == "name = 'O\\'Hara'"


def test_too_few_parameters():
    with pytest.raises(TooFewParameters):
        ParameterizedCriterion("a = ? AND b = ?", [1]).to_sql()


def test_too_many_parameters():
    with pytest.raises(TooManyParameters):
        ParameterizedCriterion("a = ?", [1, 2]).to_sql()


def test_rendering_twice_gives_the_same_sql():
    criterion = ParameterizedCriterion("a = ? OR b = ?", [1, 2])
    assert criterion.to_sql() == criterion.to_sql() == "a = 1 OR b = 2"
