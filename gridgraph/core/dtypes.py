"""Integer types for neighborhood tables.

Host tables are numpy arrays; device copies are Taichi fields. Border codes
use at most 30 bits (MAX_NDIM = 15), so 32-bit signed indices are enough on
the device.
"""

import numpy as np
import taichi as ti

# Device types
INDEX_DTYPE = ti.i32
FLAG_DTYPE = ti.i8

# Host types matching the device types, used before from_numpy()
NP_INDEX_DTYPE = np.int32
NP_FLAG_DTYPE = np.int8

# Offsets and linear displacements on the host
NP_OFFSET_DTYPE = np.int64
