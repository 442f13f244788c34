"""Cached reflection and dynamic invocation for Python classes."""

from .accessor import PropertyAccessor as PropertyAccessor
from .cache import TypeCache as TypeCache
from .cache import get_type_info as get_type_info
from .descriptor import TypeDescriptor as TypeDescriptor
from .errors import *
from .events import Event as Event
from .types import ConstructorSignature as ConstructorSignature
from .types import EventInfo as EventInfo
from .types import FieldInfo as FieldInfo
from .types import MethodSignature as MethodSignature
from .types import ParameterInfo as ParameterInfo
from .types import ParameterKind as ParameterKind
