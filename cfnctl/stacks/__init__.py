"""CloudFormation stack inventory, dependency ordering, deletion and lifecycle."""
