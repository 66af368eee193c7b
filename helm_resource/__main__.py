"""Run the helm-resource command line tool."""

from helm_resource.tool.helm_resource import main

if __name__ == "__main__":
    main()
