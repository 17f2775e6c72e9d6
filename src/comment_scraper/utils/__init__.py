#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Utility helpers: logging setup and condition waits.
"""
