# SPDX-License-Identifier: Apache-2.0

"""
Middleware package for request processing.

This package contains the CORS, error handling and request validation
components of the Seva Mitra API.
"""
