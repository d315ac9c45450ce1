import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from movier.db import engine, Base
from movier.models import *

def main():
    """Create every table declared by the models"""
    Base.metadata.create_all(bind=engine)
    print("All tables created.")

if __name__ == "__main__":
    main()
