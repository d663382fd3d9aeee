"""
Experiment Module

An experiment runs the same training procedure (a Trial subclass) many times,
each time from a different seed, to measure how reliably it succeeds: the
fraction of successful trials, the iterations they needed, and the spread of
the final score (training error for backpropagation, best fitness for
evolution).

Classes:
    Experiment: Runs independent trials, serially or in parallel, and summarizes them
"""

import numpy as np
from joblib import Parallel, delayed
from sys    import stdout
from typing import Type

from tinynet.run.config import Config
from tinynet.run.trial  import Trial

class Experiment:
    """
    Independent trials of one training procedure, with summary statistics.

    Trial number n (1-indexed) is seeded with n, so an experiment is
    reproducible regardless of how its trials are scheduled.

    Each trial contributes one results dict:
        trial_number:      1-indexed trial number
        number_iterations: Epochs or generations the trial ran for
        success:           Whether the trial met its threshold
        score:             The trial's final score (see Trial.score)

    Subclasses can override:
    - _prepare_trial(trial, trial_number): Configure a trial before it runs
    - _extract_trial_results(trial, trial_number): Add problem-specific results
      (call super() to get the common ones)
    - _analyze_trial_results(results): React to each trial's results
    - _final_report(): Present the summary (default: print it)

    Public Attributes:
        results: The results dict of each trial, in trial order

    Public Methods:
        run(num_jobs_trials=1, num_jobs_trial=1): Execute every trial
        summary():                                Aggregate statistics over the trials run
    """

    def __init__(self, trial_class: Type[Trial], num_trials: int, config: Config,
                 *args, **kwargs):
        """
        Parameters:
            trial_class: The Trial subclass run by this experiment
            num_trials:  Number of trials
            config:      Configuration shared by every trial
            *args:       Positional arguments for the trial class constructor
            **kwargs:    Keyword arguments for the trial class constructor
        """
        if num_trials < 1:
            raise ValueError(f"An experiment needs at least one trial, got {num_trials}")

        self._trial_class  = trial_class
        self._num_trials   = num_trials
        self._config       = config
        self._trial_args   = args
        self._trial_kwargs = kwargs
        self.results: list[dict] = []

    def run(self, num_jobs_trials: int = 1, num_jobs_trial: int = 1):
        """
        Run every trial, then produce the final report.

        Parameters:
            num_jobs_trials: Parallel processes across trials
                             (1 = serial, -1 = all CPU cores)
            num_jobs_trial:  Parallel processes within each trial, passed to Trial.run()
                             (keep at 1 when num_jobs_trials != 1)
        """
        numbers = range(1, self._num_trials + 1)
        if num_jobs_trials == 1:
            results = [self._run_trial(n, num_jobs_trial) for n in numbers]
        else:
            results = Parallel(num_jobs_trials)(delayed(self._run_trial)(n, num_jobs_trial)
                                                for n in numbers)

        self.results = []
        for r in results:
            self.results.append(r)
            self._analyze_trial_results(r)
        self._final_report()

    def summary(self) -> dict:
        """
        Aggregate the results of the trials run so far.

        Returns:
            dict with
                num_trials:      Number of trials run
                num_successes:   Number of successful trials
                success_rate:    num_successes / num_trials
                mean_iterations: Mean iterations of the successful trials (None if none)
                score_mean:      Mean final score over all trials (None if no trial has a score)
                score_std:       Population standard deviation of the final score
        """
        if not self.results:
            raise RuntimeError("The experiment has not been run")

        successes  = [r for r in self.results if r["success"]]
        scores     = np.array([r["score"] for r in self.results if r["score"] is not None], dtype=float)
        iterations = [r["number_iterations"] for r in successes]

        return {"num_trials"     : len(self.results),
                "num_successes"  : len(successes),
                "success_rate"   : len(successes) / len(self.results),
                "mean_iterations": float(np.mean(iterations)) if iterations else None,
                "score_mean"     : float(scores.mean()) if scores.size else None,
                "score_std"      : float(scores.std())  if scores.size else None}

    def _run_trial(self, trial_number: int, num_jobs: int = 1) -> dict:
        trial = self._trial_class(*self._trial_args,
                                  config=self._config,
                                  suppress_output=True,
                                  seed=trial_number,
                                  **self._trial_kwargs)

        self._prepare_trial(trial, trial_number)
        trial.run(num_jobs)
        return self._extract_trial_results(trial, trial_number)

    def _prepare_trial(self, trial: Trial, trial_number: int):
        s = f"Starting trial {trial_number:03d} of {self._num_trials}..."
        stdout.write(s + '\r')
        stdout.flush()

    def _extract_trial_results(self, trial: Trial, trial_number: int) -> dict:
        return {"trial_number"     : trial_number,
                "number_iterations": trial._iteration_counter,
                "success"          : not trial.failed,
                "score"            : trial.score}

    def _analyze_trial_results(self, results: dict):
        pass

    def _final_report(self):
        summary = self.summary()

        s  = "\nSUMMARY:\n"
        s += f"Trials         = {summary['num_trials']}\n"
        s += f"Success rate   = {100 * summary['success_rate']:.0f}%\n"
        if summary["mean_iterations"] is not None:
            s += f"Avg iterations = {summary['mean_iterations']:.0f}\n"
        else:
            s += "No successful trials\n"
        if summary["score_mean"] is not None:
            s += f"Final score    = {summary['score_mean']:.5f} +/- {summary['score_std']:.5f}\n"
        print(s)
