"""Pure GPA, credit and graduation-requirement calculations"""
