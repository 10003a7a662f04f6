"""
Gameplay logic for ReelCast.
NO UI DEPENDENCIES - everything here can be tested headless.
"""
