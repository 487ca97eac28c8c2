# --- src/circuitlab_core/constants.py ---
import logging

logger = logging.getLogger(__name__)

# --- Board Geometry ---

#: Two components closer than this (strictly) are connected. The renderer draws its
#: connection lines with the same value, so visual wires and solver connectivity agree.
CONNECTION_DISTANCE: float = 5.5

#: Placement grid. Positions are snapped to multiples of this step.
GRID_STEP: float = 0.5

#: Hard cap on the number of components a single board may hold.
MAX_COMPONENTS: int = 50

# --- Lumped Circuit Model ---

#: Internal resistance contributed by every LED in a cluster.
LED_INTERNAL_RESISTANCE_OHM: float = 20.0

#: Clamped forward voltage reported for a conducting LED.
LED_FORWARD_VOLTAGE_V: float = 2.1

#: Current above which an LED burns out permanently (300 mA).
LED_BURNOUT_CURRENT_A: float = 0.3

#: Clusters whose total resistance falls below this are treated as short circuits.
SHORT_CIRCUIT_THRESHOLD_OHM: float = 1.0

#: Saturated current reported for every member of a shorted cluster.
SHORT_CIRCUIT_CURRENT_A: float = 5.0

#: Floor applied to a cluster's total resistance so the current is always finite.
MIN_TOTAL_RESISTANCE_OHM: float = 0.1

logger.debug("Defined board and circuit model constants.")
