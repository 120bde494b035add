import numpy as np

# Exponent bound keeping np.exp finite for any weighted input
MAX_EXPONENT = 60.0

def steepened_sigmoid(z, steepness=4.9):
    """
    Logistic squashing function 1 / (1 + e^(-k*z)).

    The default steepness of 4.9 is the usual NEAT scaling; a steepness
    of 1.0 gives the plain logistic function.
    """
    z_scaled = np.clip(steepness * z, -MAX_EXPONENT, MAX_EXPONENT)
    return float(1.0 / (1.0 + np.exp(-z_scaled)))
