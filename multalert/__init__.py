"""multalert - audible alert for new multipliers in DXLog UDP broadcasts."""
