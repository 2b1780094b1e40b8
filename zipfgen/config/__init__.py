from zipfgen.config.base_poly_config import BasePolyConfig
from zipfgen.config.config import *
