# src/circuitlab_core/components/base_enums.py
from enum import Enum


class ComponentType(Enum):
    """
    The closed set of parts a learner can place on the board. The string values
    are the identifiers used on the wire and in lab files.
    """
    BATTERY = "BATTERY"              # Voltage source; value in volts.
    RESISTOR = "RESISTOR"            # Fixed resistance; value in ohms.
    LED = "LED"                      # Fixed internal resistance and forward voltage.
    WIRE = "WIRE"                    # Zero resistance.
    SWITCH = "SWITCH"                # Breaks its whole cluster while open.
    POTENTIOMETER = "POTENTIOMETER"  # Adjustable resistance; value in ohms.

    def __str__(self):
        return self.value
