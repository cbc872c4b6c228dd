#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Impose rendered songbook page sequences onto printable booklet sheets.
"""

import songbook_imposer as sbi
import songbook_imposer.cli


if __name__ == "__main__":
	sbi.cli.main()
