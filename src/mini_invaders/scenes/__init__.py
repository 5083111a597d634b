"""
Mini Invaders scenes
"""
