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
Base classes of the configuration graph.

Every entity of a codeplug is a ConfigObject. Entities point at each other
through WeakRef links which never keep their target alive: when an entity is
deleted, every WeakRef that points at it is told so synchronously and clears
itself (or, for list memberships, drops the member) before delete() returns.

Lists (ObjectList, RefList) give entities stable positions. Every exported
cross-reference number is derived from ObjectList.index().
"""

import enum
import logging

from codeplug import common, errors

LOG = logging.getLogger(__name__)

# Class name -> class, so references between modules can be declared by name
_CLASSES = {}


def resolve_kinds(kinds):
    """Turn a tuple of class names into a tuple of classes

    Names of classes that were never defined are skipped, nothing can be an
    instance of them.
    """
    return tuple(_CLASSES[k] if isinstance(k, str) else k
                 for k in kinds if not isinstance(k, str) or k in _CLASSES)


def _describe(value):
    if isinstance(value, enum.Enum):
        return value.name
    return repr(value)


class WeakRef:
    """A reference from @holder to another entity that does not own it

    The target's referrer registry keeps track of this object. When the
    target is deleted, notify_deleted() clears the reference and calls
    @on_delete with the deleted target.
    """

    def __init__(self, holder, on_delete=None):
        self._holder = holder
        self._target = None
        self._on_delete = on_delete

    def __repr__(self):
        return '<WeakRef %r -> %r>' % (self._holder, self._target)

    def get(self):
        return self._target

    def set(self, target):
        if target is self._target:
            return
        if isinstance(self._target, ConfigObject):
            self._target._unregister(self)
        self._target = target
        if isinstance(target, ConfigObject):
            target._register(self)

    def clear(self):
        self.set(None)

    def is_null(self):
        return self._target is None

    def get_holder(self):
        return self._holder

    def notify_deleted(self, target):
        """Called by @target while it is being deleted"""
        if target is not self._target:
            # Already re-pointed, or cleared by an earlier handler
            return
        self._target = None
        if self._on_delete:
            self._on_delete(target)


class Reference:
    """A typed WeakRef exposed as a plain attribute of a ConfigObject

    @kinds is a tuple of class names the target may be an instance of.
    With @allow_selected the attribute also accepts common.SELECTED.
    """

    def __init__(self, *kinds, allow_selected=False):
        self.kinds = kinds
        self.allow_selected = allow_selected
        self.name = None

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        link = obj._links.get(self.name)
        if link is None:
            return None
        return link.get()

    def __set__(self, obj, value):
        if value is None:
            pass
        elif value is common.SELECTED:
            if not self.allow_selected:
                raise errors.ValidationError(
                    self.name, '%s does not accept the selected channel' % (
                        self.name))
        elif not isinstance(value, resolve_kinds(self.kinds)):
            raise errors.ValidationError(
                self.name, '%s must be one of %s, not %s' % (
                    self.name, ','.join(self.kinds),
                    type(value).__name__))
        else:
            obj._check_peer(value)

        link = obj._links.get(self.name)
        if link is None:
            link = WeakRef(obj, on_delete=lambda target, name=self.name:
                           obj._reference_deleted(name, target))
            obj._links[self.name] = link
        link.set(value)


class ConfigObject:
    """Base class for all entities of a codeplug"""

    ID_PREFIX = "obj"

    name: str = ""

    _valid_map = {
        "name": common.NAME,
    }

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        _CLASSES[cls.__name__] = cls

    def __init__(self, name):
        self.__dict__['_referrers'] = []
        self.__dict__['_links'] = {}
        self.__dict__['_member_lists'] = {}
        self.__dict__['_owner'] = None
        self.__dict__['_deleted'] = False
        self.name = name

    def __repr__(self):
        return '<%s %r>' % (self.__class__.__name__, self.name)

    def __setattr__(self, name, val):
        attr = getattr(type(self), name, None)
        if not name.startswith('_') and not hasattr(type(self), name) and \
                name not in self.__dict__:
            raise AttributeError("No such attribute `%s' in %s" % (
                name, self.__class__.__name__))
        if name in self._member_lists:
            raise AttributeError("Member list `%s' cannot be replaced" % name)

        if self._deleted:
            raise errors.GraphConsistencyError(
                'Cannot modify deleted object %r' % self)
        self._check_mutable()

        if isinstance(attr, Reference):
            object.__setattr__(self, name, val)
            return

        valid = self._valid_map.get(name)
        if valid is not None and not valid(val):
            raise errors.ValidationError(
                name, "`%s' is not a valid value for `%s'" % (
                    _describe(val), name))

        self.__dict__[name] = val

    # Graph membership

    def get_codeplug(self):
        """Return the codeplug owning this object, or None if unbound"""
        if self._owner is None:
            return None
        return self._owner.get_codeplug()

    def get_owner(self):
        return self._owner

    def is_deleted(self):
        return self._deleted

    def _check_mutable(self):
        codeplug = self.get_codeplug()
        if codeplug is not None:
            codeplug.check_mutable()

    def _check_peer(self, other):
        """Make sure @other may be referenced from this object"""
        if other.is_deleted():
            raise errors.GraphConsistencyError(
                'Cannot reference deleted object %r' % other)
        mine = self.get_codeplug()
        theirs = other.get_codeplug()
        if mine is not None and theirs is not None and mine is not theirs:
            raise errors.GraphConsistencyError(
                '%r and %r belong to different codeplugs' % (self, other))

    def _add_member_list(self, name, reflist):
        self._member_lists[name] = reflist
        self.__dict__[name] = reflist
        return reflist

    def get_references(self):
        """Return a list of (attribute, target) for all set references"""
        return [(name, link.get()) for name, link in self._links.items()
                if not link.is_null()]

    def get_member_lists(self):
        return list(self._member_lists.items())

    # Lifecycle

    def _register(self, ref):
        self._referrers.append(ref)

    def _unregister(self, ref):
        try:
            self._referrers.remove(ref)
        except ValueError:
            pass

    def get_referrers(self):
        """Return the objects currently holding a reference to this one"""
        return [ref.get_holder() for ref in self._referrers]

    def _reference_deleted(self, name, target):
        LOG.debug('%r: %s target %r deleted', self, name, target)

    def delete(self):
        """Delete this object

        Every reference to this object is cleared and every list drops it
        before this returns. Deleting an object that is already being
        deleted does nothing.
        """
        if self._deleted:
            return
        self._check_mutable()
        self.__dict__['_deleted'] = True
        LOG.debug('Deleting %r (%i referrers)', self, len(self._referrers))

        referrers = list(self._referrers)
        self._referrers.clear()
        for ref in referrers:
            ref.notify_deleted(self)

        for link in self._links.values():
            link.clear()
        for reflist in self._member_lists.values():
            reflist.clear()
        self.__dict__['_owner'] = None

    # Persistence hook

    def serialize(self, context):
        """Return a tree node (dict) describing this object

        This is a pure function of the object state; references are
        expressed through the IDs assigned by @context.
        """
        node = {"id": context.get_id(self),
                "type": self.__class__.__name__}
        for field in self._valid_map:
            value = getattr(self, field)
            if isinstance(value, enum.Enum):
                value = value.name.lower()
            node[field] = value
        for name in self._reference_names():
            node[name] = context.reference(getattr(self, name))
        for name, reflist in self._member_lists.items():
            node[name] = [context.get_id(x) for x in reflist]
        return node

    @classmethod
    def _reference_names(cls):
        names = []
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                if isinstance(attr, Reference) and name not in names:
                    names.append(name)
        return names


_CLASSES[ConfigObject.__name__] = ConfigObject


class Context:
    """Maps objects to the string IDs used by the persistence format"""

    def __init__(self):
        self._ids = {}
        self._objects = {}

    def add(self, obj, ident):
        if ident in self._objects:
            raise errors.GraphConsistencyError('Duplicate ID %s' % ident)
        self._ids[obj] = ident
        self._objects[ident] = obj

    def has_object(self, obj):
        return obj in self._ids

    def get_id(self, obj):
        try:
            return self._ids[obj]
        except KeyError:
            raise errors.GraphConsistencyError(
                '%r is not part of this codeplug' % obj)

    def get_object(self, ident):
        return self._objects.get(ident)

    def reference(self, target):
        if target is None:
            return None
        if target is common.SELECTED:
            return "selected"
        return self.get_id(target)


class _BaseList:
    """An ordered sequence of unique objects with O(1) position lookup"""

    KINDS = ("ConfigObject",)

    def __init__(self, owner=None, name="list"):
        self._owner = owner
        self._name = name
        self._items = []
        self._links = {}
        self._positions = None

    def __repr__(self):
        return '<%s %s (%i)>' % (self.__class__.__name__, self._name,
                                 len(self._items))

    def get_codeplug(self):
        if self._owner is None:
            return None
        return self._owner.get_codeplug()

    def _check_mutable(self):
        codeplug = self.get_codeplug()
        if codeplug is not None:
            codeplug.check_mutable()

    def _check_member(self, obj):
        if not isinstance(obj, resolve_kinds(self.KINDS)):
            raise errors.ValidationError(
                self._name, '%s only accepts %s, not %s' % (
                    self._name, ','.join(self.KINDS), type(obj).__name__))
        if obj.is_deleted():
            raise errors.GraphConsistencyError(
                'Cannot add deleted object %r' % obj)
        if obj in self._links:
            raise errors.ValidationError(
                self._name, '%r is already in %s' % (obj, self._name))

    def _member_deleted(self, obj):
        LOG.debug('%s: dropping deleted member %r', self._name, obj)
        self._drop(obj)

    def _drop(self, obj):
        link = self._links.pop(obj)
        link.clear()
        self._items.remove(obj)
        self._positions = None

    def add(self, obj, position=-1):
        """Add @obj at @position (default: the end) and return its position"""
        self._check_mutable()
        self._check_member(obj)
        if position < 0 or position > len(self._items):
            position = len(self._items)
        link = WeakRef(self, on_delete=self._member_deleted)
        link.set(obj)
        self._links[obj] = link
        self._items.insert(position, obj)
        self._positions = None
        return position

    def remove(self, obj):
        """Remove @obj from this list without deleting it"""
        self._check_mutable()
        if obj not in self._links:
            raise errors.GraphConsistencyError(
                '%r is not in %s' % (obj, self._name))
        self._drop(obj)

    def move(self, obj, position):
        """Move @obj to @position"""
        self._check_mutable()
        current = self.index(obj)
        del self._items[current]
        if position < 0 or position > len(self._items):
            position = len(self._items)
        self._items.insert(position, obj)
        self._positions = None
        return position

    def index(self, obj):
        """Return the 0-based position of @obj

        An object that is not in this list is a consistency violation of
        the graph, not a normal result.
        """
        if self._positions is None:
            self._positions = {x: i for i, x in enumerate(self._items)}
        try:
            return self._positions[obj]
        except KeyError:
            raise errors.GraphConsistencyError(
                '%r is not in %s' % (obj, self._name))

    def at(self, position):
        """Return the object at @position"""
        if position < 0 or position >= len(self._items):
            raise errors.GraphConsistencyError(
                'Position %i is out of range for %s (%i)' % (
                    position, self._name, len(self._items)))
        return self._items[position]

    def count(self):
        return len(self._items)

    def has(self, obj):
        return obj in self._links

    def __contains__(self, obj):
        return self.has(obj)

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(tuple(self._items))

    def items(self):
        return list(self._items)


class RefList(_BaseList):
    """A list of objects referenced (but not owned) by an entity"""

    def _check_member(self, obj):
        super()._check_member(obj)
        if self._owner is not None:
            self._owner._check_peer(obj)

    def clear(self):
        """Drop all members"""
        for obj in list(self._items):
            self._drop(obj)


class ObjectList(_BaseList):
    """A list owning its members, binding them to a codeplug"""

    def __init__(self, codeplug=None, name="objects"):
        super().__init__(owner=None, name=name)
        self._codeplug = codeplug

    def get_codeplug(self):
        return self._codeplug

    def _check_member(self, obj):
        super()._check_member(obj)
        if obj.get_owner() is not None:
            raise errors.GraphConsistencyError(
                '%r is already owned by %r' % (obj, obj.get_owner()))
        peers = [t for _, t in obj.get_references()
                 if isinstance(t, ConfigObject)]
        for _, reflist in obj.get_member_lists():
            peers.extend(reflist)
        for peer in peers:
            theirs = peer.get_codeplug()
            if theirs is not None and theirs is not self._codeplug:
                raise errors.GraphConsistencyError(
                    '%r references %r of another codeplug' % (obj, peer))

    def add(self, obj, position=-1):
        position = super().add(obj, position)
        obj.__dict__['_owner'] = self
        return position

    def _drop(self, obj):
        super()._drop(obj)
        if obj.get_owner() is self:
            obj.__dict__['_owner'] = None

    def delete(self, obj):
        """Delete @obj, removing it from this list and every holder"""
        if obj not in self._links:
            raise errors.GraphConsistencyError(
                '%r is not in %s' % (obj, self._name))
        obj.delete()

    def clear(self):
        """Delete all members"""
        for obj in list(self._items):
            obj.delete()

    def find_by_name(self, name):
        for obj in self._items:
            if obj.name == name:
                return obj
        return None
