"""Tkinter desktop front-end for the CreatorHub workflow board.

Widget modules import tkinter at module scope; the state, services and
utility modules do not, so they can be imported in headless test runs.
"""
