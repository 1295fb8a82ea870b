#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Today Dashboard - личный дашборд задач на сегодня поверх Habitica API

Версия: 1.0.0
"""

__version__ = "1.0.0"
