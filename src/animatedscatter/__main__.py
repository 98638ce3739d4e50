"""
Run with: python -m animatedscatter [path/to/data.csv]
"""
from animatedscatter.main import main

main()
