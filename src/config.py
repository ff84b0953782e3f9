from util import Constants

# default group, as (P, G, Q) in hexadecimal
PARAMS_HEX = (Constants.P_HEX, Constants.G_HEX, Constants.Q_HEX)

# address the demo verifier listens on
MIX_ADDR = ('localhost', 7777)
