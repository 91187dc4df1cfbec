#!/usr/bin/env python3
"""
PR Size Labeler
Labels a pull request by how many lines it changes.
"""

from pr_size_labeler.main import main


if __name__ == "__main__":
    main()
