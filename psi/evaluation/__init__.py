from psi.evaluation.evaluator import evaluate, evaluate_list
