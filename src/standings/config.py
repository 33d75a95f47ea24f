# Innings accounting
OUTS_PER_INNING = 3
MAX_PARTIAL_OUTS = 2  # "7.2" is the largest partial inning

# Two balance metrics closer than this are treated as tied
TIE_TOLERANCE = 1e-4
