#!/usr/bin/env python
import pylox



if __name__ == "__main__":
    pylox.main()
