# Copyright 2026 The codeplug developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""
Filter expressions over user database records, like:

  country="Germany" AND callsign~"^DL"
  id<2620000,2629999> OR country IN ["Austria", "Switzerland"]
"""

import logging
import re

import lark

from codeplug import errors

LOG = logging.getLogger(__name__)
LANG = """
start: qexpr
qexpr: qexpr (OPERATOR qexpr)* | "(" qexpr ")" | _expr
QUOTE: /"/
PROPERTY: /[a-z0-9_]+/
TEXT: /[^"]+/
INT: /[0-9]+/
FLOAT: /[0-9]+\\.[0-9]+/
OPERATOR: "AND"i | "OR"i
value: QUOTE TEXT QUOTE | INT | FLOAT
_list: "[" value ("," value)* "]"
_expr: equal | match | contains | range
equal: PROPERTY "=" value
contains: PROPERTY "IN"i _list
match: PROPERTY "~" value
range: PROPERTY "<" value "," value ">"
%ignore " "
"""

USER_FIELDS = ['id', 'callsign', 'name', 'surname', 'city', 'state',
               'country', 'comment']


def union(a, b):
    return list({id(x): x for x in a + b}.values())


def intersection(a, b):
    only = {id(x) for x in a} & {id(x) for x in b}
    return list({id(x): x for x in a + b if id(x) in only}.values())


class PropertyNameError(errors.QueryFilterError):
    label = 'Property Name'


class PropertyValueError(errors.QueryFilterError):
    label = 'Property Value'


class PropertyValueStringError(errors.QueryFilterError):
    label = 'Close String'


class Interpreter(lark.Transformer):
    def __init__(self, records, visit_tokens: bool = True) -> None:
        self._records = records
        super().__init__(visit_tokens)

    def _val(self, tree):
        if isinstance(tree, lark.Token):
            value = tree
        else:
            value = tree.children[0]
        if value.type == 'TEXT':
            return value.value
        elif value.type == 'INT':
            return int(value.value)
        elif value.type == 'FLOAT':
            return float(value.value)
        else:
            raise errors.QueryFilterError(
                'Unsupported value type %r' % value.type)

    def _get(self, record, key):
        if key not in USER_FIELDS:
            raise PropertyNameError('Unknown field %r (one of %s)' % (
                key, ','.join(USER_FIELDS)))
        return getattr(record, key)

    def equal(self, items):
        prop = items[0].value
        value = self._val(items[1])
        return [x for x in self._records if self._get(x, prop) == value]

    def contains(self, items):
        prop = items[0].value
        opts = [self._val(x) for x in items[1:]]
        return [x for x in self._records if self._get(x, prop) in opts]

    def match(self, items):
        prop = items[0].value
        value = self._val(items[1])
        try:
            regex = re.compile(str(value), re.IGNORECASE)
        except re.error as e:
            raise PropertyValueError('Bad expression %r: %s' % (value, e))
        return [x for x in self._records
                if regex.search(str(self._get(x, prop)))]

    def range(self, items):
        prop = items[0].value
        lo = self._val(items[1])
        hi = self._val(items[2])
        return [x for x in self._records if lo <= self._get(x, prop) <= hi]

    def value(self, items):
        if len(items) == 1:
            # value
            return items[0]
        else:
            # " value "
            return items[1]

    def OPERATOR(self, item):
        if item.upper() == 'OR':
            return union
        else:
            return intersection

    def qexpr(self, items):
        while len(items) > 2:
            left = items.pop(0)
            op = items.pop(0)
            right = items.pop(0)
            result = op(left, right)
            items.insert(0, result)
        return items[0]


_PARSER = None

_errors = {
    PropertyValueError: ['foo=', 'foo<', 'foo IN', 'foo~'],
    PropertyValueStringError: ['foo="', 'foo~"'],
}


def parse_query(query):
    """Parse @query, raising QueryFilterError if it is malformed"""
    global _PARSER

    if _PARSER is None:
        _PARSER = lark.Lark(LANG)

    try:
        tree = _PARSER.parse(query)
    except lark.UnexpectedInput as e:
        exc_class = e.match_examples(_PARSER.parse, _errors,
                                     use_accepts=True)
        if not exc_class:
            exc_class = errors.QueryFilterError
        raise exc_class('Invalid query: %s' % e.get_context(query))
    LOG.debug('Query:\n%s', tree.pretty())
    return tree


def filter_records(records, query):
    """Return the records matching @query, in their original order"""
    records = list(records)
    tree = parse_query(query)
    try:
        matched = Interpreter(records).transform(tree).children[0]
    except lark.exceptions.VisitError as e:
        if isinstance(e.orig_exc, errors.QueryFilterError):
            raise e.orig_exc
        raise errors.QueryFilterError(str(e.orig_exc))
    keep = {id(x) for x in matched}
    return [x for x in records if id(x) in keep]
