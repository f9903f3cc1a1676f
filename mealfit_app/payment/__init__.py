"""
Payment confirmation module.

Parses provider redirect parameters, records the payment and polls until the
purchased plan has been generated. Handles transitions between
INITIALIZING → CONFIRMING → POLLING → DONE / TIMED_OUT / ERROR / CANCELLED.
"""
