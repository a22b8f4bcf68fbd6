from .enums import *
from .errors import *
from .model import *
from .target import *
from .imagetarget import *
from .directory import *
from .boost import *
from .cstep import *
from .power import *
