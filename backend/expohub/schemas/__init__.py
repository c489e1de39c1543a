# expohub/schemas/__init__.py
"""
Schema module initialization.
Exports all schema classes and serializers from submodules for convenient imports.
"""
from .common import *
from .auth import *
from .user import *
from .expo import *
from .exhibitor import *
from .activity import *
