"""Taichi kernels for border-code lookup on the device.

A kernel classifies each cell once with border_type_at() and then reads
everything else from table fields indexed by that code.
"""

import taichi as ti


@ti.func
def border_type_at(I, field: ti.template()):
    """Border code of cell I in an array shaped like field."""
    code = 0
    for d in ti.static(range(len(field.shape))):
        if I[d] == 0:
            code |= 1 << (2 * d)
        if I[d] == field.shape[d] - 1:
            code |= 2 << (2 * d)
    return code


@ti.kernel
def fill_border_types(out: ti.template()):
    """Write the border code of every cell of out."""
    for I in ti.grouped(out):
        out[I] = border_type_at(I, out)


@ti.kernel
def gather_table(border: ti.template(), table: ti.template(), out: ti.template()):
    """out[I] = table[border[I]], e.g. the valid-neighbor degree per cell."""
    for I in ti.grouped(border):
        out[I] = table[border[I]]


@ti.kernel
def count_flags(border: ti.template(), flags: ti.template(), out: ti.template()):
    """Count the set flags of each cell's border code (e.g. causal neighbors)."""
    for I in ti.grouped(border):
        code = border[I]
        total = 0
        for slot in range(flags.shape[1]):
            total += ti.cast(flags[code, slot], ti.i32)
        out[I] = total
