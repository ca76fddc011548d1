"""Loading, linting and evaluating review policy files into programs of actions."""