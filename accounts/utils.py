"""
Accounts app utility functions

Partial updates of user records.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Set


@dataclass
class UserPatch:
    """
    A partial change to a user row.

    set_fields are written as given; clear_fields are reset to NULL when the
    column allows it, otherwise to an empty string. Columns not named are
    left untouched.
    """

    set_fields: Dict[str, object] = field(default_factory=dict)
    clear_fields: Set[str] = field(default_factory=set)

    def values_for(self, model) -> Dict[str, object]:
        values = {}
        for name in self.clear_fields:
            model_field = model._meta.get_field(name)
            values[name] = None if model_field.null else ''
        values.update(self.set_fields)
        return values

    def apply(self, user) -> List[str]:
        """
        Write the patch to the database and mirror it on ``user``.

        Args:
            user: User instance to update

        Returns:
            Sorted names of the fields that were written
        """
        values = self.values_for(type(user))
        if not values:
            return []

        type(user).objects.filter(pk=user.pk).update(**values)
        for name, value in values.items():
            setattr(user, name, value)
        return sorted(values)
