# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Seva Mitra API - civic complaint and community activity tracking backend.
"""

__version__ = "1.0.0"
