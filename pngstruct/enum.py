from enum import Flag


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the format'''
    NONE    = 0
    ENUM    = 1 << 0  # values outside the enum of a field are rejected
    HEADER  = 1 << 1  # exactly one header chunk must be present
    INHERIT = 1 << 2
    STRICT  = ENUM | HEADER
