## pin lattice example for latticad
print("pin_lattice.py -- latticad lattice fill example")

import logging

from latticad.fill import Fill, FillNode
from latticad.lattice import Lattice
from latticad.logging_config import setup_logging
from latticad.vector import Vector
from latticad.xform import Transform

setup_logging(logging.INFO)

## a 3x3 pin assembly: fuel pins (universe 1) around a guide tube
## (universe 2), on a 1.26 cm square pitch

pitch = 1.26
nodes = [FillNode(1), FillNode(1), FillNode(1),
         FillNode(1), FillNode(2), FillNode(1),
         FillNode(1), FillNode(1), FillNode(1)]
pins = Fill.grid((-1,1),(-1,1),(0,0),nodes)

assembly = Lattice(2,Vector(pitch,0,0),Vector(0,pitch,0),Vector(),pins)

for x, y, z, tx, node in assembly.cells():
    print("cell ({},{}) -> {} {}".format(x,y,node,tx))

## place the whole assembly with a card-style transform, rotated 90
## degrees about z and given as direction cosine angles

placement = Transform.from_inputs([10,0,0, 90,0,90, 180,90,90],
                                  degree_format=True)
print("assembly placement: {}".format(placement))
print("reverse placement: {}".format(placement.reverse()))

## a length 4 input is tolerated, with a warning
Transform.from_inputs([1,2,3,4])
